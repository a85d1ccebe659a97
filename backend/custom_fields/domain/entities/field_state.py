"""Domain entity — the visibility decision for one field, as consumed by a schema builder."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldState:
    """Per-field outcome of a visibility pass.

    ``live`` marks a field other fields depend on: editing it must trigger
    re-evaluation of its dependents. ``dehydrated`` is False when the field
    is hidden and its policy does not ask for the value to be saved anyway,
    i.e. the save pipeline must skip the submitted value.
    """

    code: str
    visible: bool
    live: bool = False
    always_save: bool = False

    @property
    def dehydrated(self) -> bool:
        return self.visible or self.always_save
