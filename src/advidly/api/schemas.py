"""Base response models shared by the route modules."""

from pydantic import ConfigDict

from advidly.domain.patches import CamelModel


class ApiModel(CamelModel):
    """Response model built straight from a domain record."""

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(ApiModel):
    """Plain acknowledgement."""

    message: str
