"""
Request validation for clinical drafts.

Runs before any call to the generation service.
"""
from typing import Any, Dict, Union
from pydantic import BaseModel, ValidationError

from ..exceptions import MissingInputException, ValidationException
from .schemas import DraftKind, REQUEST_MODELS, PRIMARY_FIELDS

def validate_clinical_request(kind: DraftKind, data: Union[BaseModel, Dict[str, Any]]) -> BaseModel:
    """
    Validate a draft request of the given kind.

    Args:
        kind: Draft kind
        data: Request model or raw fields (camelCase or snake_case)

    Returns:
        BaseModel: The validated request model for the kind

    Raises:
        MissingInputException: If the primary text field is missing, empty or whitespace
        ValidationException: If any other field is invalid
    """
    kind = DraftKind(kind)
    model_class = REQUEST_MODELS[kind]
    field = PRIMARY_FIELDS[kind]

    if isinstance(data, model_class):
        request = data
    else:
        if isinstance(data, BaseModel):
            data = data.model_dump()
        try:
            request = model_class.model_validate(data)
        except ValidationError as e:
            missing = any(error["loc"] and error["loc"][0] in (field, _alias(model_class, field))
                          for error in e.errors())
            if missing:
                raise MissingInputException(field)
            raise ValidationException.from_pydantic(e)

    value = getattr(request, field)
    if not value or not value.strip():
        raise MissingInputException(field)
    return request

def _alias(model_class, field: str) -> str:
    return model_class.model_fields[field].alias or field
