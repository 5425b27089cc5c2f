from typing import Any, List

import yaml
from bitarray import bitarray

from qrbits.bitbuffer import BitBuffer
from qrbits.debug import Debug

STEP_SHAPES = (
    frozenset({"value", "length"}),
    frozenset({"words", "length"}),
    frozenset({"bits"}),
)


def load_script(file_path: str) -> List[dict]:
    """
    Read a YAML append script and return its validated steps.
    """
    with open(file_path, "r") as script_file:
        document = yaml.safe_load(script_file)
    return parse_script(document)


def parse_script(document: Any) -> List[dict]:
    if not isinstance(document, dict) or "appends" not in document:
        raise ValueError("Script must be a mapping with an 'appends' key")

    steps = document["appends"]
    if not isinstance(steps, list):
        raise ValueError("'appends' must be a list")

    for index, step in enumerate(steps):
        if not isinstance(step, dict) or frozenset(step) not in STEP_SHAPES:
            raise ValueError(
                f"Step {index} must have keys value+length, words+length or bits"
            )
        if "words" in step and not isinstance(step["words"], list):
            raise ValueError(f"Step {index}: 'words' must be a list")
        if "bits" in step and not isinstance(step["bits"], str):
            raise ValueError(f"Step {index}: 'bits' must be a string of 0s and 1s")

    return steps


def replay(steps: List[dict], buffer: BitBuffer | None = None) -> BitBuffer:
    """
    Apply every step to buffer (a new one by default) and return it.
    """
    if buffer is None:
        buffer = BitBuffer()

    with Debug.section(f"Replaying {len(steps)} appends"):
        for step in steps:
            if "bits" in step:
                Debug.log(f"bits {step['bits']}")
                buffer.append_bitarray(bitarray(step["bits"]))
            elif "words" in step:
                Debug.log(f"{step['length']} bits from {len(step['words'])} words")
                buffer.append_words(step["words"], step["length"])
            else:
                Debug.log(f"{step['length']} bits of {step['value']!r}")
                buffer.append_bits(step["value"], step["length"])

    return buffer


def describe(buffer: BitBuffer) -> str:
    lines = [
        f"Bit length: {buffer.bit_length}",
        f"Capacity: {buffer.capacity} bits",
        f"Bits: {buffer.to_bitarray().to01()}",
    ]
    if buffer.bit_length % 8 == 0:
        lines.append(f"Bytes: {buffer.get_bytes().hex(' ')}")
    else:
        lines.append("Bytes: (not byte aligned)")
    return "\n".join(lines)
