from __future__ import annotations

import json
import logging
import os
import random
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from ..errors import LoadoutError
from ..models import Mech
from .schema import MechRecord

if TYPE_CHECKING:  # pragma: no cover
    from importlib.resources.abc import Traversable

logger = logging.getLogger(__name__)

SUFFIXES = (".yaml", ".yml", ".json")
FALLBACK_PILOT = "Fallback AI"


@dataclass(frozen=True)
class LoadoutEntry:
    """A loadout file that can be listed and loaded."""

    name: str
    location: Union[Path, "Traversable"]
    builtin: bool = False

    @property
    def stem(self) -> str:
        return self.location.name.rsplit(".", 1)[0]


def display_name(filename: str) -> str:
    """``Gundam_Barbatos.yaml`` -> ``Gundam Barbatos``."""
    return filename.rsplit(".", 1)[0].replace("_", " ")


def safe_filename(name: str) -> str:
    return name.replace(" ", "_").replace("/", "_")


class LoadoutRepository:
    """Lists, loads and saves mech loadouts.

    Packaged sample loadouts are listed first (unless ``include_builtin`` is
    False), followed by YAML/JSON files found directly under ``root``. Saving
    always writes to ``root`` with an atomic replace.
    """

    def __init__(self, root: Path, include_builtin: bool = True) -> None:
        self.root = Path(root)
        self.include_builtin = include_builtin

    # Listing

    def list_loadouts(self) -> List[LoadoutEntry]:
        entries: List[LoadoutEntry] = []
        if self.include_builtin:
            entries.extend(self._builtin_entries())
        entries.extend(self._user_entries())
        return entries

    def _builtin_entries(self) -> List[LoadoutEntry]:
        folder = resources.files("mechfight.resources").joinpath("loadouts")
        found = [
            LoadoutEntry(name=display_name(item.name), location=item, builtin=True)
            for item in folder.iterdir()
            if item.is_file() and item.name.endswith(SUFFIXES)
        ]
        return sorted(found, key=lambda e: e.name.lower())

    def _user_entries(self) -> List[LoadoutEntry]:
        if not self.root.is_dir():
            logger.debug("Loadout directory %s does not exist yet", self.root)
            return []
        found = [
            LoadoutEntry(name=display_name(p.name), location=p)
            for p in self.root.iterdir()
            if p.is_file() and p.suffix.lower() in SUFFIXES
        ]
        return sorted(found, key=lambda e: e.name.lower())

    def find(self, name: str) -> Optional[LoadoutEntry]:
        """Look up a loadout by display name or file stem, ignoring case.

        User loadouts shadow packaged ones with the same name.
        """
        wanted = name.strip().lower()
        match: Optional[LoadoutEntry] = None
        for entry in self.list_loadouts():
            if wanted in (entry.name.lower(), entry.stem.lower()):
                match = entry
        return match

    # Loading

    def load(self, entry: Union[LoadoutEntry, Path, str]) -> Mech:
        """Parse a loadout file into a Mech.

        Raises:
            LoadoutError: the file is unreadable, malformed or fails validation.
        """
        location = entry.location if isinstance(entry, LoadoutEntry) else Path(entry)
        try:
            text = location.read_text(encoding="utf-8")
        except OSError as exc:
            raise LoadoutError(f"Cannot read loadout {location}: {exc}") from exc

        data = parse_loadout_text(text, location.name)
        try:
            record = MechRecord.model_validate(data)
        except ValidationError as exc:
            raise LoadoutError(f"Invalid loadout {location.name}: {exc}") from exc
        mech = record.to_mech()
        logger.info("Loaded mech %s from %s", mech.name, location.name)
        return mech

    def choose_random(self, rng: Optional[random.Random] = None) -> Mech:
        """Load a random available loadout, falling back to a bare default mech."""
        rng = rng or random.Random()
        entries = self.list_loadouts()
        if not entries:
            logger.warning("No mech files found. Falling back to a hardcoded default mech.")
            return Mech.create_default(FALLBACK_PILOT)
        entry = rng.choice(entries)
        logger.info("Defaulting to random mech: %s", entry.name)
        try:
            return self.load(entry)
        except LoadoutError as exc:
            logger.error("Failed to load a random mech: %s", exc)
            return Mech.create_default(FALLBACK_PILOT)

    # Saving

    def save(self, mech: Mech, fmt: str = "yaml") -> Path:
        """Write ``mech`` under ``root`` and return the file path.

        The file name comes from the mech name with spaces and slashes replaced
        by underscores. An existing file with that name is overwritten.
        """
        fmt = fmt.lower()
        if fmt not in ("yaml", "json"):
            raise ValueError("fmt must be 'yaml' or 'json'")
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.root / f"{safe_filename(mech.name)}.{fmt}"
        payload = dump_loadout(MechRecord.from_mech(mech).model_dump(), fmt)

        tmp_path = path.with_name(path.name + ".tmp")
        logger.debug("Writing loadout to temporary file: %s", tmp_path)
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
        logger.info("Custom mech saved to: %s", path)
        return path


def parse_loadout_text(text: str, filename: str) -> Dict[str, Any]:
    try:
        if filename.lower().endswith(".json"):
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise LoadoutError(f"Malformed loadout {filename}: {exc}") from exc
    if not isinstance(data, dict):
        raise LoadoutError(f"Loadout {filename} must contain a mapping")
    return data


def dump_loadout(data: Dict[str, Any], fmt: str) -> str:
    if fmt == "json":
        return json.dumps(data, ensure_ascii=False, indent=2) + "\n"
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
