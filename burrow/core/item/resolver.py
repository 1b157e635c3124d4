"""심볼 이름 → 아이템 해석

resolve_item은 전역 함수(total function)다. 사용자 입력이나 절차 생성 결과가
해석 실패를 일으키는 일은 없다. 모르는 이름은 1x1 Gear로 떨어진다.
"""

import logging
import re

from .models import Gear, Item, Spell, UsageDots
from .registry import CatalogRegistry

logger = logging.getLogger(__name__)

SPELL_PREFIX = "Spell:"
HIRELING_PREFIX = "Hireling:"
HIRELING_DESCRIPTION = "Hireling reference"
SPELL_USAGE_TOTAL = 3

# 시작 장비 문자열의 꼬리 주석: "Spear (medium, d8)" → "Spear"
_ANNOTATION_RE = re.compile(r"\s*\([^()]*\)\s*$")


def make_spell(name: str, registry: CatalogRegistry) -> Spell:
    """주문 아이템 합성. 템플릿이 없으면 description 없음."""
    template = registry.get_spell(name)
    return Spell(
        name=name,
        usage=UsageDots(total=SPELL_USAGE_TOTAL),
        description=template.description if template else None,
    )


def resolve_item(name: str, registry: CatalogRegistry) -> Item:
    """이름을 구체 아이템으로 해석. 우선순위:

    1. "Spell: X" → 주문 X (1x1, usage 3)
    2. "Hireling: X" → 고용인 참조용 1x1 Gear (원문 이름 유지)
    3. 카탈로그 대소문자 무시 조회 (실패 시 꼬리 괄호 주석 제거 후 재조회)
    4. 원문 이름 그대로의 최소 1x1 Gear
    """
    stripped = name.strip()

    if stripped.startswith(SPELL_PREFIX):
        return make_spell(stripped[len(SPELL_PREFIX):].strip(), registry)

    if stripped.startswith(HIRELING_PREFIX):
        return Gear(name=name, description=HIRELING_DESCRIPTION)

    item = registry.get(stripped)
    if item is None:
        bare = _ANNOTATION_RE.sub("", stripped)
        if bare and bare != stripped:
            item = registry.get(bare)
    if item is not None:
        return item

    logger.debug("Unresolved item name %r, falling back to gear", name)
    return Gear(name=name)
