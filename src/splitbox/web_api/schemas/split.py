"""
Split Schemas
=============
Request and response models for split and format endpoints.

Field aliases carry the camelCase wire names of the message schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional, Union

from splitbox.model import (
    DedupeMode,
    DelimiterMode,
    OutputDelimiter,
    OutputTemplate,
    SplitMode,
    ValidationMode,
)


class SplitRequestModel(BaseModel):
    """Request to prepare and split a block of text"""

    raw_input: str = Field(..., alias="rawInput", description="Delimited free text")
    delimiter: DelimiterMode = Field(default=DelimiterMode.AUTO)
    dedupe_mode: DedupeMode = Field(default=DedupeMode.NONE, alias="dedupeMode")
    validation_mode: ValidationMode = Field(default=ValidationMode.NONE, alias="validationMode")
    custom_pattern: Optional[str] = Field(default=None, alias="customValidationPattern")
    split_mode: SplitMode = Field(default=SplitMode.ITEMS_PER_GROUP, alias="splitMode")
    # Checked by the chunker so bad values come back as a split error.
    split_value: Union[int, float] = Field(default=100, alias="splitValue")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "rawInput": "alpha\nbeta\ngamma",
                "delimiter": "auto",
                "dedupeMode": "case_insensitive",
                "validationMode": "none",
                "splitMode": "items_per_group",
                "splitValue": 2,
            }
        }


class GroupModel(BaseModel):
    """One batch"""

    index: int
    items: List[str]
    label: str


class StatsModel(BaseModel):
    """Preparation counters"""

    raw_token_count: int = Field(default=0, alias="rawTokenCount")
    empty_removed: int = Field(default=0, alias="emptyRemoved")
    invalid_removed: int = Field(default=0, alias="invalidRemoved")
    duplicates_removed: int = Field(default=0, alias="duplicatesRemoved")
    invalid_examples: List[str] = Field(default_factory=list, alias="invalidExamples")

    class Config:
        populate_by_name = True


class SplitResponseModel(BaseModel):
    """Groups plus the stats of the preparation run"""

    groups: List[GroupModel]
    stats: StatsModel


class FormatRequest(BaseModel):
    """Render a list of items with an output template"""

    items: List[str]
    template: OutputTemplate = Field(default=OutputTemplate.PLAIN)
    delimiter: OutputDelimiter = Field(default=OutputDelimiter.NEWLINE)

    class Config:
        json_schema_extra = {
            "example": {"items": ["O'Reilly", "x"], "template": "sql_in"}
        }


class FormatResponse(BaseModel):
    """Rendered batch content"""

    content: str
    extension: str
