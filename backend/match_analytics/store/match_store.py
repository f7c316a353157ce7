"""
Record source: ball-by-ball JSON files in a data directory.

Builds a metadata index of every record for listing and filtering, and
parses individual records on demand. Both the index and parsed records are
kept in a TTLCache handed in by the caller.
"""

import json
import math
import time
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from match_analytics.logging_config import get_logger
from match_analytics.schemas.matches import MatchIndex, MatchListResponse, MatchMetadata, Pagination
from match_analytics.schemas.record import Match, MatchInfo
from match_analytics.store.cache import TTLCache

logger = get_logger("store")

INDEX_FILENAME = ".match-index.json"
INDEX_CACHE_KEY = "index"


class MatchNotFoundError(LookupError):
    """No record exists for the requested match id."""

    def __init__(self, match_id: str):
        super().__init__(f"Match {match_id} not found")
        self.match_id = match_id


class MatchRecordError(ValueError):
    """A record file exists but cannot be read or parsed."""

    def __init__(self, filename: str, reason: str):
        super().__init__(f"Invalid match record {filename}: {reason}")
        self.filename = filename
        self.reason = reason


class MatchStore:
    """Directory of match records with a cached metadata index."""

    def __init__(self, data_dir: Path, cache: TTLCache, max_page_size: int = 100):
        self.data_dir = Path(data_dir)
        self.cache = cache
        self.max_page_size = max_page_size

    # ----- files -----

    def _record_files(self):
        if not self.data_dir.is_dir():
            logger.warning(f"Data directory not found: {self.data_dir}")
            return []

        return sorted(
            path for path in self.data_dir.iterdir()
            if path.is_file()
            and path.suffix == ".json"
            and not path.name.startswith(".")
            and path.name != INDEX_FILENAME
        )

    def _path_for(self, match_id: str) -> Path:
        # Ids are file stems; anything that could leave the directory is unknown
        if not match_id or "/" in match_id or "\\" in match_id or match_id.startswith("."):
            raise MatchNotFoundError(match_id)
        return self.data_dir / f"{match_id}.json"

    def _read_json(self, path: Path) -> dict:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise MatchRecordError(path.name, str(e))

        if not isinstance(data, dict):
            raise MatchRecordError(path.name, "top level is not an object")
        return data

    # ----- index -----

    def _metadata_for(self, path: Path) -> MatchMetadata:
        data = self._read_json(path)
        try:
            info = MatchInfo.model_validate(data.get("info") or {})
        except ValidationError as e:
            raise MatchRecordError(path.name, f"invalid info: {e.error_count()} error(s)")

        date = info.dates[0] if info.dates else ""
        stat = path.stat()
        return MatchMetadata(
            match_id=path.stem,
            filename=path.name,
            match_type=info.match_type,
            date=date,
            year=date[:4],
            teams=info.teams,
            venue=info.venue,
            city=info.city,
            event=info.event.name if info.event else None,
            season=info.season,
            outcome=info.outcome.model_dump(exclude_none=True) or None,
            file_size=stat.st_size,
            last_modified=stat.st_mtime,
        )

    def build_index(self) -> MatchIndex:
        """Scan the data directory. Unreadable files are logged and skipped."""
        start_time = time.time()
        metadata = []

        for path in self._record_files():
            try:
                metadata.append(self._metadata_for(path))
            except MatchRecordError as e:
                logger.error(f"Skipping record: {e}", extra={"error": e.reason})

        # ISO dates sort lexically; undated records go last
        metadata.sort(key=lambda m: m.date, reverse=True)

        index = MatchIndex(
            metadata=metadata,
            match_types=sorted({m.match_type for m in metadata}),
            years=sorted({m.year for m in metadata if m.year}, reverse=True),
            total_count=len(metadata),
            last_updated=time.time(),
        )

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Metadata index built for {index.total_count} matches",
            extra={"duration_ms": round(duration_ms, 2)},
        )
        return index

    def get_index(self) -> MatchIndex:
        index = self.cache.get(INDEX_CACHE_KEY)
        if index is None:
            index = self.build_index()
            self.cache.set(INDEX_CACHE_KEY, index)
        return index

    def list_matches(
        self,
        page: int = 1,
        limit: int = 20,
        match_type: Optional[str] = None,
        year: Optional[str] = None,
    ) -> MatchListResponse:
        """
        Page through the index, latest matches first.

        `match_type` matches case-insensitively and `year` exactly; "all"
        or None disables a filter.

        Raises:
            ValueError: If page < 1 or limit is outside 1..max_page_size
        """
        if page < 1:
            raise ValueError(f"page must be at least 1, got {page}")
        if limit < 1 or limit > self.max_page_size:
            raise ValueError(f"limit must be between 1 and {self.max_page_size}, got {limit}")

        index = self.get_index()
        matches = index.metadata

        if match_type and match_type != "all":
            matches = [m for m in matches if m.match_type.lower() == match_type.lower()]
        if year and year != "all":
            matches = [m for m in matches if m.year == year]

        total = len(matches)
        total_pages = math.ceil(total / limit)
        offset = (page - 1) * limit

        return MatchListResponse(
            matches=matches[offset:offset + limit],
            pagination=Pagination(
                total=total,
                page=page,
                limit=limit,
                total_pages=total_pages,
                has_next=page < total_pages,
                has_prev=page > 1,
            ),
            available_match_types=index.match_types,
            available_years=index.years,
            current_filter=match_type or "all",
            current_year=year or "all",
        )

    # ----- records -----

    def load_match(self, match_id: str) -> Match:
        """
        Parse one record.

        Raises:
            MatchNotFoundError: If no file exists for `match_id`
            MatchRecordError: If the file is not a valid match record
        """
        cache_key = ("match", match_id)
        match = self.cache.get(cache_key)
        if match is not None:
            return match

        path = self._path_for(match_id)
        if not path.is_file():
            raise MatchNotFoundError(match_id)

        data = self._read_json(path)
        try:
            match = Match.model_validate({**data, "match_id": match_id})
        except ValidationError as e:
            raise MatchRecordError(path.name, f"{e.error_count()} validation error(s)")

        self.cache.set(cache_key, match)
        return match

    def refresh(self) -> None:
        """Drop the cached index and every cached record."""
        self.cache.invalidate()
        logger.info("Match cache invalidated")
