"""Shared scaffolding for seeded puzzle dataset builders and evaluators."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar, Dict, Generic, Iterable, List, Mapping, Optional, Sequence, TypeVar, Union

PathLike = Union[str, Path]
RecordT = TypeVar("RecordT")
ResultT = TypeVar("ResultT")

logger = logging.getLogger(__name__)


class AbstractPuzzleGenerator(ABC, Generic[RecordT]):
    """Base class for dataset builders that turn seeds into puzzle records."""

    def __init__(self, output_dir: PathLike) -> None:
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def create_puzzle(self, *, seed: Optional[str] = None, puzzle_id: Optional[str] = None) -> RecordT:
        """Create a puzzle from ``seed``, drawing a fresh seed when it is ``None``."""

    def create_random_puzzle(self) -> RecordT:
        return self.create_puzzle()

    def generate_dataset(
        self,
        count: Optional[int] = None,
        *,
        seeds: Optional[Sequence[str]] = None,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
    ) -> List[RecordT]:
        """Build ``count`` random puzzles, or one puzzle per entry of ``seeds``."""

        if seeds is not None:
            records = [self.create_puzzle(seed=seed) for seed in seeds]
        elif count is not None:
            records = [self.create_random_puzzle() for _ in range(count)]
        else:
            raise ValueError("Either count or seeds must be given")
        if metadata_path is not None:
            self.write_metadata(records, metadata_path, append=append)
        return records

    def write_metadata(
        self,
        records: Iterable[RecordT],
        metadata_path: PathLike,
        *,
        append: bool = True,
    ) -> None:
        """Write records as a JSON list; when appending, new records replace ones with the same id."""

        path = Path(metadata_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = [self.record_to_dict(record) for record in records]
        existing: List[Dict[str, Any]] = []
        if append and path.exists():
            new_ids = {item.get("id") for item in payload}
            existing = [
                item
                for item in json.loads(path.read_text(encoding="utf-8"))
                if item.get("id") not in new_ids
            ]
        path.write_text(json.dumps(existing + payload, indent=2), encoding="utf-8")
        logger.info("Wrote %d puzzle records to %s", len(existing) + len(payload), path)

    def record_to_dict(self, record: RecordT) -> Dict[str, Any]:
        if hasattr(record, "to_dict"):
            return getattr(record, "to_dict")()
        raise TypeError(
            "Puzzle record must implement to_dict() or override record_to_dict() in the generator."
        )

    def relativize_path(self, path: Path) -> str:
        try:
            return path.relative_to(self.output_dir).as_posix()
        except ValueError:
            return path.as_posix()


class AbstractPuzzleEvaluator(ABC, Generic[ResultT]):
    """Loads puzzle records keyed by id and scores candidate solutions against them."""

    required_fields: ClassVar[Sequence[str]] = ("id",)

    def __init__(
        self,
        metadata_path: PathLike,
        *,
        base_dir: Optional[PathLike] = None,
    ) -> None:
        self.metadata_path = Path(metadata_path)
        if not self.metadata_path.exists():
            raise FileNotFoundError(f"Metadata file not found: {self.metadata_path}")
        self.base_dir = Path(base_dir) if base_dir is not None else self.metadata_path.parent
        self._records = self._load_metadata()

    @property
    def records(self) -> Dict[str, Dict[str, Any]]:
        return self._records

    @property
    def puzzle_ids(self) -> List[str]:
        return list(self._records)

    def _load_metadata(self) -> Dict[str, Dict[str, Any]]:
        raw = json.loads(self.metadata_path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError("Puzzle metadata must be a list of records")
        records: Dict[str, Dict[str, Any]] = {}
        for record in raw:
            missing = [name for name in self.required_fields if name not in record]
            if missing:
                raise ValueError(f"Puzzle record is missing {', '.join(missing)}: {record.get('id')!r}")
            if not record["id"]:
                raise ValueError("Each puzzle record must include an 'id'")
            records[str(record["id"])] = record
        return records

    def get_record(self, puzzle_id: str) -> Dict[str, Any]:
        try:
            return self._records[puzzle_id]
        except KeyError as exc:
            raise KeyError(f"Puzzle id '{puzzle_id}' not found in metadata") from exc

    def resolve_path(self, path_value: object) -> Path:
        candidate = Path(str(path_value))
        if not candidate.is_absolute():
            candidate = self.base_dir / candidate
        return candidate

    @abstractmethod
    def evaluate(self, puzzle_id: str, *args, **kwargs) -> ResultT:
        """Evaluate a candidate solution for the given puzzle."""

    def evaluate_many(self, submissions: Mapping[str, Any]) -> Dict[str, ResultT]:
        """Evaluate ``{puzzle_id: candidate}`` pairs in insertion order."""

        return {puzzle_id: self.evaluate(puzzle_id, candidate) for puzzle_id, candidate in submissions.items()}


__all__ = [
    "AbstractPuzzleGenerator",
    "AbstractPuzzleEvaluator",
    "PathLike",
]
