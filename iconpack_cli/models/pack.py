"""
Models describing icon packs and the units of work derived from them.
"""

from dataclasses import dataclass

from pydantic import BaseModel, field_validator

# A pack's mapping: local icon name -> remote icon spec ("prefix-rest")
IconMapping = dict[str, str]


class PackDescriptor(BaseModel):
    """One validated entry of the pack manifest."""

    display_name: str
    path: str

    class Config:
        """Pydantic model configuration."""

        frozen = True
        str_strip_whitespace = True

    @field_validator("display_name", "path")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v


@dataclass(frozen=True)
class DownloadTask:
    """A single icon to fetch and install, numbered from 1."""

    index: int
    local_icon_name: str
    remote_icon_spec: str


def materialize_tasks(mapping: IconMapping) -> list[DownloadTask]:
    """Turns a mapping into an ordered task list. Order follows the mapping."""
    return [
        DownloadTask(index=i, local_icon_name=name, remote_icon_spec=spec)
        for i, (name, spec) in enumerate(mapping.items(), 1)
    ]
