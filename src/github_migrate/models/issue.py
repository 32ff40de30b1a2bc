"""Issue model."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class Issue(BaseModel):
    """The parts of an issue that are carried to the destination."""

    title: str = Field(..., description='Issue title')
    body: Optional[str] = Field(default=None, description='Issue body')
    labels: List[str] = Field(default_factory=list, description='Label names')
    milestone: Optional[int] = Field(
        default=None, description='Milestone number, passed through unchecked'
    )

    # Source metadata, informational only
    number: Optional[int] = Field(default=None, description='Source issue number')

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Issue':
        """Build from a REST issue payload.

        Labels may arrive as objects or plain names; the milestone as an
        object or a bare number.
        """
        labels = []
        for label in data.get('labels') or []:
            name = label.get('name') if isinstance(label, dict) else label
            if name and name not in labels:
                labels.append(name)

        milestone = data.get('milestone')
        if isinstance(milestone, dict):
            milestone = milestone.get('number')

        return cls(
            title=data['title'],
            body=data.get('body'),
            labels=labels,
            milestone=milestone,
            number=data.get('number'),
        )

    def to_create_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {'title': self.title, 'labels': list(self.labels)}
        if self.body is not None:
            payload['body'] = self.body
        if self.milestone is not None:
            payload['milestone'] = self.milestone
        return payload
