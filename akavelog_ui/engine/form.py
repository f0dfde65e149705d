"""Schema-driven create form.

The form turns an ``InputTypeInfo`` into editable name -> string values plus
a free-standing title, and turns those back into a ``CreateInputRequest``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from akavelog_ui.api.models import ConfigField, CreateInputRequest, InputTypeInfo
from akavelog_ui.errors import FormUnavailableError
from akavelog_ui.state import CellView, StateCell


@dataclass(frozen=True)
class FormState:
    title: str = ""
    values: Mapping[str, str] = field(default_factory=dict)


def _seed(fields: List[ConfigField]) -> Mapping[str, str]:
    return MappingProxyType({f.name: f.example if f.example is not None else "" for f in fields})


class DynamicFormModel:
    def __init__(self, default_title: str = "") -> None:
        self._schema: Optional[InputTypeInfo] = None
        self._state: StateCell[FormState] = StateCell("form", FormState(title=default_title))
        self._default_title = default_title

    # ==================== Read side ====================

    @property
    def state(self) -> CellView[FormState]:
        return self._state.view()

    @property
    def schema(self) -> Optional[InputTypeInfo]:
        return self._schema

    @property
    def available(self) -> bool:
        """False until a schema is loaded; rendering shows a placeholder meanwhile."""
        return self._schema is not None

    @property
    def title(self) -> str:
        return self._state.value.title

    @property
    def values(self) -> Dict[str, str]:
        return dict(self._state.value.values)

    def missing_required(self) -> List[str]:
        if self._schema is None:
            return []
        current = self._state.value.values
        return [
            f.name
            for f in self._schema.fields
            if f.required and not current.get(f.name, "").strip()
        ]

    # ==================== Write side ====================

    def load(self, schema: InputTypeInfo) -> None:
        """Seed one value per field from its example; the title keeps the caller default."""
        self._schema = schema
        self._state.set(FormState(title=self._default_title, values=_seed(schema.fields)))

    def mark_unavailable(self) -> None:
        self._schema = None
        self._state.set(FormState(title=self._state.value.title))

    def set_title(self, value: str) -> None:
        self._state.set(replace(self._state.value, title=value))

    def set_value(self, name: str, value: str) -> None:
        current = self._state.value
        if name not in current.values:
            raise KeyError(name)
        values = dict(current.values)
        values[name] = value
        self._state.set(replace(current, values=MappingProxyType(values)))

    def build_payload(self) -> CreateInputRequest:
        """Build the create request.

        Trimmed-empty values are left out; an all-empty config is omitted
        entirely so the backend applies its defaults. An empty title is
        omitted too and the backend assigns one.
        """
        if self._schema is None:
            raise FormUnavailableError("Input config is not loaded")

        state = self._state.value
        config = {}
        for name, raw in state.values.items():
            trimmed = raw.strip()
            if trimmed != "":
                config[name] = trimmed

        return CreateInputRequest(
            type=self._schema.type,
            title=state.title.strip() or None,
            config=config or None,
        )

    def reset(self) -> None:
        """Reseed field values from the schema examples and clear the title.

        The title goes to "" rather than back to the default.
        """
        if self._schema is None:
            self._state.set(replace(self._state.value, title=""))
            return
        self._state.set(FormState(title="", values=_seed(self._schema.fields)))
