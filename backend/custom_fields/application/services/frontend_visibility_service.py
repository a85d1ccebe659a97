"""Frontend (reactive) visibility — evaluated against live, possibly unsaved form state.

A form layer registers ``visibility_callback(...)`` as the visibility hook
of each field and calls it again whenever a live field changes. Calls are
pure: no cache is kept between them and nothing is read but the getter.
"""

from collections.abc import Callable, Iterable
from typing import Any

from custom_fields.application.services.dependency_resolver import DependencyResolver
from custom_fields.application.services.visibility_logic_service import VisibilityLogicService
from custom_fields.domain.entities import CustomField, FieldState


class FrontendVisibilityService:
    """Client-state visibility evaluation sharing the backend's algorithm.

    One level deep by default; ``cascade`` also hides dependents of hidden fields.
    """

    def __init__(
        self,
        logic: VisibilityLogicService | None = None,
        resolver: DependencyResolver | None = None,
        *,
        enabled: bool = True,
        cascade: bool = False,
    ):
        self._resolver = resolver or DependencyResolver()
        self._logic = logic or VisibilityLogicService(self._resolver)
        self._enabled = enabled
        self._cascade = cascade

    def evaluate_visibility(
        self,
        custom_field: CustomField,
        all_fields: Iterable[CustomField],
        get_value: Any,
    ) -> bool:
        """Whether ``custom_field`` is visible given the current form state.

        ``get_value`` is a ``(code) -> value`` accessor or a mapping.
        """
        if not self._enabled:
            return True

        all_fields = list(all_fields)
        source = self._logic.normalized_source(get_value, all_fields)
        if self._cascade:
            return self._logic.evaluate_visibility_with_cascading(custom_field, source, all_fields)
        return self._logic.evaluate_visibility(custom_field, source)

    def visibility_callback(
        self, custom_field: CustomField, all_fields: Iterable[CustomField]
    ) -> Callable[[Any], bool]:
        """A closure to re-invoke with the latest getter on every dependency change."""
        all_fields = list(all_fields)

        def is_visible(get_value: Any) -> bool:
            return self.evaluate_visibility(custom_field, all_fields, get_value)

        return is_visible

    def build_field_states(
        self, fields: Iterable[CustomField], get_value: Any
    ) -> list[FieldState]:
        """Visibility, live flag and save signal for every field, in input order."""
        fields = list(fields)
        live_codes = self._resolver.live_field_codes(fields) if self._enabled else set()

        return [
            FieldState(
                code=f.code,
                visible=self.evaluate_visibility(f, fields, get_value),
                live=f.code in live_codes,
                always_save=self._logic.should_always_save(f),
            )
            for f in fields
        ]
