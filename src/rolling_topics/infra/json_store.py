"""JSON file repository for rolling_topics.

This module persists ModelState values as one JSON file per model ID,
so a rolling model can be reloaded and updated in a later session.
"""

from pathlib import Path
from typing import Self

from pydantic import ValidationError as PydanticValidationError

from rolling_topics.config import StorageSettings
from rolling_topics.errors import ValidationError
from rolling_topics.interfaces.storage import StateStorageInterface
from rolling_topics.logging import get_logger
from rolling_topics.models.state import ModelState

__all__ = [
    "JsonStateRepository",
]

logger = get_logger(__name__)


class JsonStateRepository(StateStorageInterface):
    """File-backed implementation of StateStorageInterface.

    The estimator's model payload must be JSON-serializable.

    Example:
        repo = JsonStateRepository(Path("states"))
        repo.save(state)
        state = repo.load(state.id)
    """

    def __init__(self, directory: Path, indent: int | None = None) -> None:
        """Initialize repository.

        Args:
            directory: Directory holding one <model_id>.json per state
            indent: JSON indentation (None writes compact files)
        """
        self._directory = Path(directory)
        self._indent = indent

    @classmethod
    def from_config(cls, config: StorageSettings) -> Self:
        """Factory method using storage settings."""
        return cls(config.directory, indent=config.indent)

    def _path(self, model_id: str) -> Path:
        if not model_id or "/" in model_id or "\\" in model_id or model_id.startswith("."):
            raise ValidationError(f"invalid model id for file storage: {model_id!r}")
        return self._directory / f"{model_id}.json"

    def save(self, state: ModelState) -> None:
        path = self._path(state.id)
        self._directory.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(state.model_dump_json(indent=self._indent), encoding="utf-8")
        tmp.replace(path)
        logger.info(
            "state_saved",
            model_id=state.id,
            chunks=len(state.chunk_log),
            path=str(path),
        )

    def load(self, model_id: str) -> ModelState:
        path = self._path(model_id)
        if not path.exists():
            raise KeyError(f"no stored state for model: {model_id}")
        try:
            state = ModelState.from_json(path.read_bytes())
        except PydanticValidationError as e:
            raise ValidationError(f"stored state {path} is invalid: {e}") from e
        logger.info("state_loaded", model_id=model_id, chunks=len(state.chunk_log))
        return state

    def exists(self, model_id: str) -> bool:
        return self._path(model_id).exists()

    def list_models(self) -> list[str]:
        """IDs of all stored states, sorted."""
        if not self._directory.exists():
            return []
        return sorted(path.stem for path in self._directory.glob("*.json"))
