"""Data models."""

from dataclasses import asdict, dataclass
from datetime import date


@dataclass(frozen=True)
class RikishiRecord:
    rid: int
    highest_rank: str = ""  # slug, e.g. "ozeki"
    real_name: str = ""
    birth_date: date | None = None
    origin: str = ""  # shusshin
    height_cm: int = 0
    weight_kg: int = 0
    university: str = ""
    heya: str = ""
    shikona: str = ""
    first_basho: str = ""  # YYYY.MM

    def as_row(self) -> dict[str, str]:
        """Flatten to string values for CSV output."""
        row = {k: str(v) for k, v in asdict(self).items()}
        row["birth_date"] = self.birth_date.isoformat() if self.birth_date else ""
        return row
