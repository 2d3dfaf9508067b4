"""Reconcile option selected flags against submitted values."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, List, Optional, Sequence

from .models import SelectOption
from .tag_builder import stringify_attribute

logger = logging.getLogger(__name__)


def _fold_case(value: str) -> str:
    """Upper-case each character on its own, skipping multi-character mappings."""

    return "".join(
        upper if len(upper := char.upper()) == 1 else char for char in value
    )


def normalize_selected_values(payload: Any) -> Optional[List[str]]:
    """Return the string forms of a scalar or iterable selected-values payload."""

    if payload is None:
        return None
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8")
    if isinstance(payload, (str, Mapping)) or not isinstance(payload, Iterable):
        return [stringify_attribute(payload)]
    return [stringify_attribute(item) for item in payload]


def reconcile_multiple(
    options: Sequence[SelectOption], selected_values: Any, allow_multiple: bool
) -> List[SelectOption]:
    """Mark options whose value appears in ``selected_values``.

    Matching ignores case. When ``allow_multiple`` is false only the first
    option that ends up selected keeps its flag, whether it was pre-selected
    or matched. The input options are never modified.
    """

    values = normalize_selected_values(selected_values)
    if values is None:
        return list(options)

    value_set = {_fold_case(value) for value in values}
    reconciled: List[SelectOption] = []
    previous_selected = False
    for option in options:
        selected = False
        if allow_multiple or not previous_selected:
            selected = option.selected or _fold_case(option.effective_value) in value_set
        previous_selected = previous_selected or selected
        reconciled.append(option.model_copy(update={"selected": selected}))

    logger.debug(
        "reconciled %d options against %d values (allow_multiple=%s)",
        len(reconciled),
        len(values),
        allow_multiple,
    )
    return reconciled


def reconcile_single(options: Sequence[SelectOption], selected_value: Optional[str]) -> List[SelectOption]:
    """Select the first option that is pre-selected or matches ``selected_value``.

    Other flags are left alone. Without a match the options pass through
    unchanged.
    """

    if not selected_value:
        return list(options)

    target = _fold_case(selected_value)
    for index, option in enumerate(options):
        if option.selected or _fold_case(option.effective_value) == target:
            reconciled = list(options)
            reconciled[index] = option.model_copy(update={"selected": True})
            return reconciled

    logger.debug("no option matched %r", selected_value)
    return list(options)


__all__ = ["normalize_selected_values", "reconcile_multiple", "reconcile_single"]
