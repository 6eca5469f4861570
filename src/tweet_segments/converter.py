"""Convert text segments to CSV or JSON."""

import csv
import dataclasses
import io
import json
from collections.abc import Iterable
from typing import TextIO

from .models import TextSegment, UrlEntity, UserMentionEntity

CSV_COLUMNS = [
    "type",
    "start",
    "end",
    "raw_text",
    "text",
    "entity_type",
]


def segment_to_dict(segment: TextSegment) -> dict:
    entity = None
    if segment.entity is not None:
        entity = {
            "kind": type(segment.entity).__name__,
            **dataclasses.asdict(segment.entity),
        }
    return {
        "type": segment.type.value,
        "start": segment.start,
        "end": segment.end,
        "raw_text": segment.raw_text,
        "text": segment.text,
        "entity": entity,
    }


def segments_to_json(
    segments: Iterable[TextSegment],
    hidden_prefix: Iterable[UserMentionEntity] = (),
    hidden_suffix: Iterable[UrlEntity] = (),
    indent: int | None = 2,
) -> str:
    """Serialize segments, plus the entities an extended view hides."""
    return json.dumps(
        {
            "segments": [segment_to_dict(s) for s in segments],
            "hidden_prefix": [dataclasses.asdict(m) for m in hidden_prefix],
            "hidden_suffix": [dataclasses.asdict(u) for u in hidden_suffix],
        },
        indent=indent,
        ensure_ascii=False,
    )


def segments_to_csv(
    segments: Iterable[TextSegment], output: TextIO | None = None
) -> str:
    """Convert segments to CSV format.

    Args:
        segments: Segments to convert, in order.
        output: Optional file-like object to write to. If None, returns CSV as string.

    Returns:
        CSV content as a string (also written to output if provided).
    """
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=CSV_COLUMNS, quoting=csv.QUOTE_MINIMAL)
    writer.writeheader()

    for s in segments:
        writer.writerow(
            {
                "type": s.type.value,
                "start": s.start,
                "end": s.end,
                "raw_text": s.raw_text,
                "text": s.text,
                "entity_type": type(s.entity).__name__ if s.entity else "",
            }
        )

    result = buf.getvalue()
    if output is not None:
        output.write(result)
    return result
