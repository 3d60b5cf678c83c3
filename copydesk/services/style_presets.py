"""Style preset service: per-user reusable limits and style rules."""

from typing import Any, Optional
from uuid import UUID

from sqlmodel import Session

from copydesk.content.codec import decode_list, decode_mapping, encode_json
from copydesk.content.repository import StylePresetRepository
from copydesk.db import Database
from copydesk.db.models import (
    StylePreset,
    StylePresetCreate,
    StylePresetRead,
    StylePresetUpdate,
    utcnow,
)
from copydesk.exceptions import ConflictError, NotFoundOrDeniedError, ValidationError
from copydesk.logging import get_logger

logger = get_logger(__name__)

_LIST_FIELDS = ("character_limits", "brand_keywords", "forbidden_words")


def to_read(preset: StylePreset) -> StylePresetRead:
    """Convert a stored preset to its read model, decoding structured fields."""
    return StylePresetRead(
        id=preset.id,
        user_id=preset.user_id,
        name=preset.name,
        description=preset.description,
        character_limits=decode_list(preset.character_limits, []),
        style_rules=decode_mapping(preset.style_rules, {}),
        brand_keywords=decode_list(preset.brand_keywords, []),
        forbidden_words=decode_list(preset.forbidden_words, []),
        created_at=preset.created_at,
        updated_at=preset.updated_at,
    )


class StylePresetService:
    """CRUD for style presets, scoped to the owning user."""

    def __init__(self, db: Database):
        self.db = db

    def _get_owned(self, session: Session, preset_id: UUID, user_id: UUID) -> StylePreset:
        preset = StylePresetRepository(session).get(preset_id)
        if preset is None or preset.user_id != user_id:
            raise NotFoundOrDeniedError("Style preset")
        return preset

    def _check_name_free(
        self,
        session: Session,
        user_id: UUID,
        name: str,
        exclude_id: Optional[UUID] = None,
    ) -> None:
        existing = StylePresetRepository(session).get_by_name(user_id, name)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(
                f"A style preset named '{name}' already exists",
                error_code="PRESET_NAME_TAKEN",
            )

    def list_for_user(self, user_id: UUID) -> list[StylePresetRead]:
        """All presets of a user, most recently updated first."""
        with self.db.session() as session:
            return [to_read(p) for p in StylePresetRepository(session).list_by_user(user_id)]

    def get(self, preset_id: UUID, user_id: UUID) -> StylePresetRead:
        """Get one of the user's presets."""
        with self.db.session() as session:
            return to_read(self._get_owned(session, preset_id, user_id))

    def create(self, user_id: UUID, data: StylePresetCreate) -> StylePresetRead:
        """Create a preset. Names are unique per user."""
        name = (data.name or "").strip()
        if not name:
            raise ValidationError("Preset name is required", details={"field": "name"})

        with self.db.transaction() as session:
            self._check_name_free(session, user_id, name)
            preset = StylePresetRepository(session).add(StylePreset(
                user_id=user_id,
                name=name,
                description=data.description,
                character_limits=encode_json(data.character_limits),
                style_rules=encode_json(data.style_rules),
                brand_keywords=encode_json(data.brand_keywords),
                forbidden_words=encode_json(data.forbidden_words),
            ))
            logger.info("style_preset_created", preset_id=str(preset.id), user_id=str(user_id))
            return to_read(preset)

    def update(self, preset_id: UUID, user_id: UUID, data: StylePresetUpdate) -> StylePresetRead:
        """Merge the supplied fields into a preset. Unset fields keep their value."""
        changes: dict[str, Any] = data.model_dump(exclude_unset=True)
        if "name" in changes:
            changes["name"] = (changes["name"] or "").strip()
            if not changes["name"]:
                raise ValidationError("Preset name is required", details={"field": "name"})

        with self.db.transaction() as session:
            preset = self._get_owned(session, preset_id, user_id)
            if "name" in changes:
                self._check_name_free(session, user_id, changes["name"], exclude_id=preset.id)

            for field, value in changes.items():
                if field in _LIST_FIELDS:
                    value = encode_json(value if value is not None else [])
                elif field == "style_rules":
                    value = encode_json(value if value is not None else {})
                setattr(preset, field, value)
            preset.updated_at = utcnow()
            StylePresetRepository(session).add(preset)
            logger.info("style_preset_updated", preset_id=str(preset.id), fields=sorted(changes))
            return to_read(preset)

    def delete(self, preset_id: UUID, user_id: UUID) -> None:
        """Delete one of the user's presets."""
        with self.db.transaction() as session:
            preset = self._get_owned(session, preset_id, user_id)
            StylePresetRepository(session).delete(preset)
            logger.info("style_preset_deleted", preset_id=str(preset_id), user_id=str(user_id))
