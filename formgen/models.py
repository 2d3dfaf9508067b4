"""Pydantic models for select rendering."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

AttributeValue = Union[str, bool, int, float]


class SelectOption(BaseModel):
    """One selectable entry of a select control."""

    text: str = Field(..., description="Text displayed for the option.")
    value: Optional[str] = Field(
        None,
        description="Submitted value; the text is used for comparisons when absent.",
    )
    selected: bool = Field(False, description="Whether the option starts selected.")

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    @property
    def effective_value(self) -> str:
        return self.value if self.value is not None else self.text


class SelectRequest(BaseModel):
    """Fields shared by dropdown and list box requests."""

    name: Optional[str] = Field(None, description="Form field name; required.")
    default_option: Optional[str] = Field(
        None,
        alias="defaultOption",
        description="Placeholder rendered as a leading option with an empty value.",
    )
    options: List[SelectOption] = Field(
        default_factory=list, description="Options in display order."
    )
    attributes: Optional[Dict[str, AttributeValue]] = Field(
        None,
        description="Extra attributes; explicit name/size/multiple always win.",
    )

    model_config = ConfigDict(populate_by_name=True)


class DropdownRequest(SelectRequest):
    """Single selection control."""

    selected_value: Any = Field(
        None,
        alias="selectedValue",
        description="Value whose string form picks the selected option.",
    )


class ListBoxRequest(SelectRequest):
    """Multi-row control allowing zero, one or many selections."""

    selected_values: Any = Field(
        None,
        alias="selectedValues",
        description="Scalar or sequence of values to mark selected.",
    )
    size: Optional[int] = Field(None, description="Visible row count.")
    allow_multiple: bool = Field(
        False,
        alias="allowMultiple",
        description="Whether more than one option may end up selected.",
    )


__all__ = [
    "AttributeValue",
    "DropdownRequest",
    "ListBoxRequest",
    "SelectOption",
    "SelectRequest",
]
