"""Helpers shared by the API views."""

from collections.abc import Mapping

from shared.domain.exceptions import FieldError, ValidationError
from shared.infrastructure.representation import RepresentationAdapter, get_representation


def request_object(data, field: str = 'non_field_errors') -> Mapping:
    """Return ``data`` when it is a JSON object, otherwise raise a ValidationError."""
    if not isinstance(data, Mapping):
        raise ValidationError([
            FieldError(
                field=field,
                code=FieldError.INVALID,
                message=f"Expected an object, got {type(data).__name__}",
                value=type(data).__name__,
            )
        ])
    return data


class RepresentationMixin:
    """
    Lets a view answer in the shape named by ``?representation=``

    ``resource`` names what the view serves ('car' or 'booking'); the
    serializer class is picked from the chosen representation.
    """

    representation_param = 'representation'
    resource = None

    def get_representation(self) -> RepresentationAdapter:
        request = getattr(self, 'request', None)
        name = request.query_params.get(self.representation_param) if request is not None else None
        return get_representation(name)

    def get_serializer_class(self):  # type: ignore
        return self.get_representation().serializer_class(self.resource)
