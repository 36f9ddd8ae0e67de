"""Toolkit-independent checkbox controls.

A control knows which chart units depend on it, so a change can be routed
to exactly the charts that need a redraw.
"""

from typing import Callable, Hashable, Iterable, Sequence

from service.climate.models import Unit


class Checkbox:

    def __init__(
        self,
        value: Hashable,
        label: str = "",
        checked: bool = True,
        units: Sequence[Unit] = (),
        on_change: Callable[["Checkbox"], None] | None = None,
    ):
        self.value = value
        self.label = label
        self.units = tuple(units)
        self.on_change = on_change
        self._checked = checked

    @property
    def checked(self) -> bool:
        return self._checked

    def set_checked(self, checked: bool) -> bool:
        """Sets the checked state. Fires on_change only if the state changed.

        Returns True if the state changed.
        """
        if checked == self._checked:
            return False
        self._checked = checked
        if self.on_change is not None:
            self.on_change(self)
        return True

    def __repr__(self) -> str:
        return f"Checkbox({self.value!r}, checked={self._checked})"


class CheckboxGroup:

    def __init__(self, name: str, checkboxes: Iterable[Checkbox]):
        self.name = name
        self._boxes = list(checkboxes)
        self._by_value = {b.value: b for b in self._boxes}

    def __len__(self):
        return len(self._boxes)

    def __iter__(self):
        return iter(self._boxes)

    def __contains__(self, value: Hashable) -> bool:
        return value in self._by_value

    def get(self, value: Hashable) -> Checkbox | None:
        return self._by_value.get(value)

    def checked_values(self) -> list:
        """Returns the values of all checked boxes, in control order."""
        return [b.value for b in self._boxes if b.checked]

    def set_checked(self, value: Hashable, checked: bool) -> bool:
        box = self._by_value.get(value)
        if box is None:
            raise KeyError(f"{value!r} is not a control of {self.name}")
        return box.set_checked(checked)

    def set_checked_values(self, values: Iterable[Hashable]) -> int:
        """Checks exactly the given values and unchecks all others.

        Values without a matching control are ignored.
        Returns the number of controls whose state changed.
        """
        wanted = set(values)
        changed = 0
        for b in self._boxes:
            if b.set_checked(b.value in wanted):
                changed += 1
        return changed

    def toggle_all(self) -> int:
        """Sets all controls to the inverse of the first control's state.

        Returns the number of controls whose state changed.
        """
        if not self._boxes:
            return 0
        new_state = not self._boxes[0].checked
        changed = 0
        for b in self._boxes:
            if b.set_checked(new_state):
                changed += 1
        return changed
