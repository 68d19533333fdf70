"""Read execution details from the agent's JSON output file.

The file holds a JSON array of messages; the last one is a system message
with the run metrics (cost_usd, duration_ms, duration_api_ms).
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from comment_link.models import ExecutionDetails

LOG = logging.getLogger("comment_link.execution")


def read_execution_details(output_file: str | Path | None) -> ExecutionDetails | None:
    """Return metrics from the last system message of the output file.

    Returns None if the path is unset, the file is missing, or the last
    message carries no metrics. Read and parse errors are logged, not
    raised.
    """
    if not output_file:
        return None
    path = Path(output_file)
    if not path.is_file():
        LOG.debug("Output file %s not found", path)
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        LOG.error("Error reading output file %s: %s", path, e)
        return None

    if not isinstance(data, list) or not data:
        return None
    last = data[-1]
    if not isinstance(last, dict) or last.get("role") != "system":
        return None
    if "cost_usd" not in last or "duration_ms" not in last:
        return None
    try:
        return ExecutionDetails.model_validate(last)
    except ValidationError as e:
        LOG.error("Invalid execution details in %s: %s", path, e)
        return None
