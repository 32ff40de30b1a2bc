"""Label model."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, validator


class Label(BaseModel):
    """Issue label, copied by value."""

    name: str = Field(..., description='Label name')
    color: str = Field(default='ededed', description='Hex color without leading #')
    description: Optional[str] = Field(default=None, description='Label description')

    @validator('color')
    def validate_color(cls, v):
        """Strip a leading ``#``; the API rejects it."""
        return v.lstrip('#')

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Label':
        return cls(
            name=data['name'],
            color=data.get('color') or 'ededed',
            description=data.get('description'),
        )

    def to_create_payload(self) -> Dict[str, Any]:
        payload = {'name': self.name, 'color': self.color}
        if self.description is not None:
            payload['description'] = self.description
        return payload
