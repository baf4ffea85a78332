"""Shared helpers for pydantic-backed request forms."""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from flask import request
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

FormT = TypeVar("FormT", bound="FormModel")


def structure_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by their top-level field."""

    structured: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        loc = error.get("loc", ())
        key = str(loc[0]) if loc else "__root__"
        structured.setdefault(key, []).append(error.get("msg", "Invalid value"))
    return structured


class FormModel(BaseModel):
    """Base class for submitted forms; surrounding whitespace is stripped."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    @classmethod
    def parse(cls: type[FormT], payload: dict[str, Any]) -> tuple[Optional[FormT], dict[str, list[str]]]:
        """Validate ``payload``; returns ``(form, {})`` or ``(None, errors)``."""

        try:
            return cls.model_validate(payload), {}
        except PydanticValidationError as exc:
            return None, structure_errors(exc)


def request_payload() -> dict[str, Any]:
    """JSON body when present, otherwise submitted form fields."""

    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


__all__ = ["FormModel", "request_payload", "structure_errors"]
