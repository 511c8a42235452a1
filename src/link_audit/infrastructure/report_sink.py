import json
from pathlib import Path
from typing import Any

from pathvalidate import sanitize_filename

from src.config.logger_config import logger


def make_report_filename(name: str) -> str:
    safe_name = sanitize_filename(name, replacement_text="_", platform="universal")
    if not safe_name:
        safe_name = "report"
    return f"{safe_name}.json"


class JsonReportSink:
    def __init__(self, report_dir: str | Path) -> None:
        self.report_dir = Path(report_dir)
        self.report_dir.mkdir(parents=True, exist_ok=True)

    def write_report(self, name: str, payload: dict[str, Any]) -> str:
        report_path = self.report_dir / make_report_filename(name)
        report_path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        logger.info("Link health report written: report_path={}", str(report_path))
        return str(report_path)
