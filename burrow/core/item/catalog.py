"""정적 아이템 테이블 — 무기 / 방어구 / 탄약 / 장비 / 주문 / 상태이상

CatalogRegistry.default()가 시작 시 한 번 읽는다.
테이블 항목을 직접 배치하지 않는다. 항상 registry를 통해 복사본을 얻는다.
"""

from .models import (
    Armour,
    ConditionTemplate,
    Gear,
    Item,
    SpellTemplate,
    UsageDots,
    Weapon,
)


def _weapon(name: str, width: int, slots: int, damage: str, description: str) -> Weapon:
    return Weapon(
        name=name,
        width=width,
        height=1,
        slots=slots,
        damage=damage,
        usage=UsageDots(total=3),
        description=description,
    )


def _gear(
    name: str,
    description: str,
    uses: int | None = None,
    width: int = 1,
    slots: int = 1,
) -> Gear:
    return Gear(
        name=name,
        width=width,
        height=1,
        slots=slots,
        usage=UsageDots(total=uses) if uses is not None else None,
        description=description,
    )


WEAPONS: tuple[Item, ...] = (
    # Light (1 paw, 1x1)
    _weapon("Dagger", 1, 1, "d6", "Light"),
    _weapon("Needle", 1, 1, "d6", "Light"),
    _weapon("Spoon", 1, 1, "d6", "Light"),
    _weapon("Fishhook", 1, 1, "d6", "Light"),
    _weapon("Rolling pin", 1, 1, "d6", "Light"),
    _weapon("Sword", 1, 1, "d6/d8", "Light, versatile"),
    # Medium (2 paws, 2x1)
    _weapon("Spear", 2, 1, "d6/d8", "Medium"),
    _weapon("Club", 2, 1, "d6/d8", "Medium"),
    _weapon("Hammer", 2, 1, "d6/d8", "Medium"),
    _weapon("Saw", 2, 1, "d6/d8", "Medium"),
    _weapon("Crook", 2, 1, "d6/d8", "Medium"),
    _weapon("Axe", 2, 1, "d6/d8", "Medium"),
    _weapon("Staff", 2, 1, "d6/d8", "Medium"),
    _weapon("Hatchet", 2, 1, "d6/d8", "Medium"),
    _weapon("Pickaxe", 2, 1, "d6/d8", "Medium"),
    # Heavy (both paws, 2x1, 2 slots)
    _weapon("Halberd", 2, 2, "d10", "Heavy"),
    _weapon("Heavy hammer", 2, 2, "d10", "Heavy"),
    _weapon("Trashhook", 2, 2, "d10", "Heavy"),
    # Ranged
    _weapon("Sling", 1, 1, "d6", "Ranged"),
    _weapon("Bow", 2, 1, "d8", "Heavy ranged"),
    _weapon("Light crossbow", 1, 1, "d6", "Ranged"),
    _weapon("Heavy crossbow", 2, 2, "d10", "Heavy ranged"),
)

ARMOUR: tuple[Item, ...] = (
    Armour(
        name="Shield",
        slots=1,
        defence=1,
        usage=UsageDots(total=3),
        description="Light, +1 armour",
    ),
    Armour(
        name="Lead coat",
        width=2,
        slots=1,
        defence=1,
        usage=UsageDots(total=3),
        description="Heavy, armour 1",
    ),
    Armour(
        name="Chain mail",
        width=2,
        slots=1,
        defence=1,
        usage=UsageDots(total=3),
        description="Heavy, armour 1",
    ),
)

AMMUNITION: tuple[Item, ...] = (
    _gear("Stones, pouch", "Ammunition for slings", uses=3),
    _gear("Arrows, quiver", "Ammunition for bows", uses=3),
)

GEAR: tuple[Item, ...] = (
    _gear("Rope", "3 uses", uses=3),
    _gear("Lantern", "3 uses", uses=3),
    _gear("Cookpots", "Cook food"),
    _gear("Magnifying glass", "Examine small things"),
    _gear("Bottle of paint", "3 uses", uses=3),
    _gear("Needle & thread", "3 uses", uses=3),
    _gear("Herbs", "Healing, 3 uses", uses=3),
    _gear("Bag of seeds", "Plant things"),
    _gear("Smoke bomb", "1 use", uses=1),
    _gear("Stink spray", "1 use", uses=1),
    _gear("Net", "Trap creatures"),
    _gear("Lockpicks", "Pick locks"),
    _gear("Disguise kit", "3 uses", uses=3),
    _gear("Wire", "3 uses", uses=3),
    _gear("Pliers", "Grip and bend"),
    _gear("Compass", "Find north"),
    _gear("Spyglass", "See far away"),
    _gear("Cart", "6 extra inventory slots", slots=0),
    _gear("Jar of honey", "3 uses, sweet", uses=3),
    _gear("Flask of spirits", "3 uses", uses=3),
    _gear("Musical instrument", "Play music"),
    _gear("Holy symbol", "Religious icon"),
    _gear("Glass vials", "3 uses", uses=3),
    _gear("Silver mirror", "Reflect light"),
    _gear("Torches", "Mark usage every 6 Turns", uses=3),
    _gear("Rations", "Mark usage after a meal", uses=3),
    _gear("Bedroll", "Comfortable sleeping"),
    _gear("Caltrops", "3 uses, slow pursuers", uses=3),
    _gear("Chalk", "3 uses, mark surfaces", uses=3),
    _gear("Chisel", "Carve stone"),
    _gear("Crowbar", "Pry things open"),
    _gear("Fishing rod", "Catch fish"),
    _gear("Glue", "3 uses, stick things", uses=3),
    _gear("Grappling hook", "Climb, hook things"),
    _gear("Ink & quill", "3 uses, write things", uses=3),
    _gear("Iron spikes", "3 uses, secure doors", uses=3),
    _gear("Metal file", "File through metal"),
    _gear("Parchment", "3 uses, write on", uses=3),
    _gear("Pole", "10 feet, prod things", width=2),
    _gear("Pulleys", "Lift heavy things"),
    _gear("Tent", "Shelter for 2 mice", width=2),
    _gear("Tinderbox", "Light fires"),
    _gear("Twine", "3 uses, tie things", uses=3),
    _gear("Waterskin", "3 uses, carry water", uses=3),
)

SPELL_TEMPLATES: tuple[SpellTemplate, ...] = (
    SpellTemplate(
        "Fireball",
        'Shoot a fireball up to 24". Deal [SUM] + [DICE] damage to all creatures within 6".',
        "Burn a piece of wood",
    ),
    SpellTemplate(
        "Heal",
        "Heal [SUM] STR damage and remove the Injured Condition from a creature.",
        "Bandage a wound",
    ),
    SpellTemplate(
        "Magic Missile",
        "Deal [SUM] + [DICE] damage to a creature within sight.",
        "Break an item made of glass",
    ),
    SpellTemplate(
        "Fear",
        "Give the Frightened Condition to [DICE] creatures.",
        "Scare an animal",
    ),
    SpellTemplate(
        "Darkness",
        'Create a [SUM] x 2" diameter sphere of pure darkness for [DICE] Turns.',
        "Sit alone in the dark for a Turn",
    ),
    SpellTemplate(
        "Restore",
        "Remove Exhausted or Frightened Condition from [DICE] + 1 creatures.",
        "Eat a hearty meal",
    ),
    SpellTemplate(
        "Be Understood",
        "Make your meaning clear to [DICE] creatures of another species for [DICE] Turns.",
        "Have a conversation with someone new",
    ),
    SpellTemplate(
        "Ghost Beetle",
        "Create an illusory beetle that can carry 6 inventory slots for [DICE] x 6 Turns.",
        "Catch a beetle",
    ),
    SpellTemplate(
        "Light",
        "Force [DICE] creatures to make a WIL save or become stunned. "
        "Alternately, create light as bright as a torch for [SUM] turns.",
        "Look at the sun",
    ),
    SpellTemplate(
        "Invisible Ring",
        'Creates [DICE] x 6" ring of force. It is invisible and immovable. Lasts [DICE] Turns.',
        "Tie a knot in a rope",
    ),
    SpellTemplate(
        "Knock",
        "Open a door or container, as if a Save were made with STR score of 10 + [DICE] x 4.",
        "Open a lock with a key",
    ),
    SpellTemplate(
        "Grease",
        'Cover [DICE] x 6" area in slippery, flammable grease. '
        "Creatures in the area must make a DEX save or fall prone.",
        "Oil a squeaky hinge",
    ),
    SpellTemplate(
        "Grow",
        "Grow a creature to [DICE] + 1 times its original size for 1 Turn.",
        "Water a plant",
    ),
    SpellTemplate(
        "Invisibility",
        "Make creature invisible for [DICE] Turns. Any movement reduces duration by 1 Turn.",
        "Close your eyes for a Turn",
    ),
    SpellTemplate(
        "Catnip",
        "Turn object into an irresistible lure for cats. Lasts [DICE] Turns.",
        "Pet a cat",
    ),
)

CONDITION_TEMPLATES: tuple[ConditionTemplate, ...] = (
    ConditionTemplate(
        "Exhausted",
        "Disadvantage on all saves. Cannot benefit from short rests.",
        "Full rest at a safe haven.",
    ),
    ConditionTemplate(
        "Frightened",
        "Disadvantage on WIL saves. Must flee from source of fear.",
        "Short rest in a safe location.",
    ),
    ConditionTemplate(
        "Hungry",
        "Disadvantage on STR saves. Cannot benefit from rests.",
        "Eat a ration.",
    ),
    ConditionTemplate(
        "Injured",
        "Disadvantage on STR and DEX saves.",
        "Full rest with medical treatment.",
    ),
    ConditionTemplate(
        "Sick",
        "Disadvantage on all saves. Cannot benefit from rests.",
        "Herbal remedy or full rest at a safe haven.",
    ),
)
