"""Byte-stable JSON for validation reports written by the CLI."""

import json

from pydantic import BaseModel


def dump_report(result: BaseModel) -> str:
    """
    Render a result model as one line of canonical JSON plus a newline.

    Keys are sorted and separators compact so two runs over the same
    payload produce identical files; message order is kept as validated.
    Czech text stays UTF-8 rather than \\u escapes.
    """
    text = json.dumps(result.model_dump(mode="json"), sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return text + "\n"
