"""Validation helpers for named model output bundles"""

from typing import Dict, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..exceptions import MalformedOutputError

OutputBundle = Mapping[str, np.ndarray]


def find_output(outputs: OutputBundle, aliases: Sequence[str]) -> np.ndarray:
    """
    Look up the first output present under any of the given names

    Args:
        outputs: Named output arrays from the model runtime
        aliases: Candidate names, tried in order

    Returns:
        The matching array

    Raises:
        MalformedOutputError: If none of the names is present
    """
    for name in aliases:
        value = outputs.get(name)
        if value is not None:
            return np.asarray(value)

    raise MalformedOutputError(
        f"None of the outputs {list(aliases)} found, "
        f"available outputs: {sorted(outputs.keys())}"
    )


def expect_shape(array: np.ndarray,
                 expected: Tuple[Optional[int], ...],
                 name: str) -> Tuple[int, ...]:
    """
    Check rank and fixed extents of an output array

    Args:
        array: Array to check
        expected: One entry per axis, None for a free extent
        name: Output name used in error messages

    Returns:
        The array's shape

    Raises:
        MalformedOutputError: On rank or extent mismatch
    """
    shape = tuple(int(d) for d in array.shape)
    if len(shape) != len(expected):
        raise MalformedOutputError(
            f"Unexpected {name} shape {list(shape)}, expected rank {len(expected)}"
        )

    for axis, (actual, wanted) in enumerate(zip(shape, expected)):
        if wanted is not None and actual != wanted:
            raise MalformedOutputError(
                f"Unexpected {name} shape {list(shape)}, "
                f"axis {axis} should be {wanted}"
            )

    return shape


def describe_outputs(outputs: OutputBundle) -> Dict[str, list]:
    """Shapes of every output, for diagnostics"""
    return {name: list(np.shape(value)) for name, value in outputs.items()}
