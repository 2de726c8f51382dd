"""Tests for the tree operations -- modify, take, insert, cleanup, instantiate."""

import pytest

from deck_editor.editor.operations import (
    Modification,
    cleanup,
    insert,
    instantiate,
    modify,
    prepare_cleanup,
    take,
)
from deck_editor.editor.paths import TreeContractError
from deck_editor.ir import (
    Ability,
    Cooldown,
    CooldownNone,
    DirectionCard,
    DragBaseCard,
    DragCooldownModifier,
    DragDirection,
    DragMultiCastModifier,
    DragProjectileModifier,
    DragStatusEffect,
    EffectCard,
    LockToOwner,
    NoEnemyFire,
    NoneCard,
    OnHit,
    PaletteCard,
    ProjectileCard,
    ProjectileNone,
    SignedSimpleCooldownModifier,
    SignedSimpleCooldownModifierType,
    SimpleCooldownModifier,
    SimpleCooldownModifierType,
    SimpleModify,
    SimpleProjectileModifierType,
    SimpleStatusEffect,
    SimpleStatusEffectType,
    Spread,
    StatusEffectsCard,
    Trail,
    TriggerCard,
    UnsignedSimpleStatusEffect,
    UnsignedSimpleStatusEffectType,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _speed(value: int) -> SimpleModify:
    return SimpleModify(modifier_type=SimpleProjectileModifierType.SPEED, value=value)


def _size(value: int) -> SimpleModify:
    return SimpleModify(modifier_type=SimpleProjectileModifierType.SIZE, value=value)


def _add_charge(value: int) -> DragCooldownModifier:
    return DragCooldownModifier(value=SimpleCooldownModifier(
        modifier_type=SimpleCooldownModifierType.ADD_CHARGE, value=value,
    ))


def _gravity(stacks: int, direction: DirectionCard) -> SimpleStatusEffect:
    return SimpleStatusEffect(
        effect_type=SimpleStatusEffectType.INCREASE_GRAVITY, stacks=stacks, direction=direction,
    )


def _fill_caches(deck) -> None:
    for cooldown in deck.cooldowns:
        cooldown.cached_value = (1.0, [1.0])
        for ability in cooldown.abilities:
            ability.cached_recovery = (1.0, [1.0])


def _caches_cleared(cooldown) -> bool:
    return cooldown.cached_value is None and all(
        a.cached_recovery is None for a in cooldown.abilities
    )


# ---------------------------------------------------------------------------
# modify
# ---------------------------------------------------------------------------

class TestModify:
    def test_increase(self, deck):
        modify(deck, [2, 1, 0, 0], Modification.INCREASE)
        assert deck.cooldowns[0].abilities[0].card.modifiers[0].value == 3

    def test_signed_has_no_floor(self, deck):
        for _ in range(3):
            modify(deck, [2, 1, 0, 0], Modification.DECREASE)
        assert deck.cooldowns[0].abilities[0].card.modifiers[0].value == -1

    def test_stack_count_floors_at_one(self, deck):
        for _ in range(3):
            modify(deck, [3, 1, 0, 0, 0], Modification.DECREASE)
        assert deck.cooldowns[1].abilities[0].card.modifiers[0] == Spread(value=1)

    def test_cooldown_modifier_floors_at_one(self, deck):
        modify(deck, [2, 0, 0], Modification.DECREASE)
        assert deck.cooldowns[0].modifiers[0].value == 1

    def test_unsigned_status_floors_at_zero(self):
        card = StatusEffectsCard(effects=[UnsignedSimpleStatusEffect(
            effect_type=UnsignedSimpleStatusEffectType.OVERHEAL, stacks=1,
        )])
        modify(card, [0], Modification.DECREASE)
        modify(card, [0], Modification.DECREASE)
        assert card.effects[0].stacks == 0

    def test_node_fields(self):
        trail = Trail(frequency=1)
        modify(trail, [], Modification.DECREASE)
        assert trail.frequency == 1

        card = StatusEffectsCard(duration=2)
        modify(card, [], Modification.DECREASE)
        modify(card, [], Modification.DECREASE)
        assert card.duration == 1

        trigger = TriggerCard(trigger_id=1)
        modify(trigger, [], Modification.DECREASE)
        modify(trigger, [], Modification.DECREASE)
        assert trigger.trigger_id == 0

    def test_effect_card_steps_its_effect(self, deck):
        modify(deck, [2, 1, 0, 1, 0], Modification.INCREASE)
        assert deck.cooldowns[0].abilities[0].card.modifiers[1].card.effect.value == 4

    def test_other_is_noop(self, deck):
        modify(deck, [2, 1, 0, 0], Modification.OTHER)
        assert deck.cooldowns[0].abilities[0].card.modifiers[0].value == 2

    def test_valueless_node_is_noop(self, deck):
        before = deck.model_copy(deep=True)
        modify(deck, [2, 1, 0, 2], Modification.INCREASE)
        assert deck == before

    def test_decrease_on_cooldown_removes_it(self, deck):
        modify(deck, [2], Modification.DECREASE)
        assert len(deck.cooldowns) == 1
        assert len(deck.cooldowns[0].abilities[0].card.cards) == 2

    def test_increase_on_cooldown_keeps_it(self, deck):
        modify(deck, [2], Modification.INCREASE)
        assert len(deck.cooldowns) == 2

    def test_passive_effect(self, deck):
        modify(deck, [1, 0], Modification.INCREASE)
        assert deck.passive.passive_effects[0].stacks == 2

    def test_into_leaf_raises(self, deck):
        with pytest.raises(TreeContractError):
            modify(deck, [2, 1, 0, 0, 0], Modification.INCREASE)

    def test_palette_zone_raises(self, deck):
        with pytest.raises(TreeContractError):
            modify(deck, [0, 1], Modification.INCREASE)

    def test_modify_never_prunes(self):
        card = ProjectileCard(modifiers=[_speed(1)])
        modify(card, [0], Modification.DECREASE)
        assert card.modifiers == [_speed(0)]


# ---------------------------------------------------------------------------
# take
# ---------------------------------------------------------------------------

class TestTake:
    def test_take_modifier_leaves_none(self, deck):
        projectile = deck.cooldowns[0].abilities[0].card
        speed = projectile.modifiers[0]
        item = take(deck, [2, 1, 0, 0])
        assert isinstance(item, DragProjectileModifier)
        assert item.value == speed
        assert isinstance(projectile.modifiers[0], ProjectileNone)
        assert len(projectile.modifiers) == 3

    def test_take_ability_card(self, deck):
        item = take(deck, [2, 1, 0])
        assert isinstance(item, DragBaseCard)
        assert isinstance(item.value, ProjectileCard)
        assert isinstance(deck.cooldowns[0].abilities[0].card, NoneCard)

    def test_take_nested_card(self, deck):
        item = take(deck, [2, 1, 0, 1, 0])
        assert isinstance(item.value, EffectCard)
        assert isinstance(deck.cooldowns[0].abilities[0].card.modifiers[1].card, NoneCard)

    def test_take_direction(self, deck):
        item = take(deck, [2, 1, 0, 2, 0])
        assert item == DragDirection(value=DirectionCard.UP)
        assert deck.cooldowns[0].abilities[0].card.modifiers[2].direction is DirectionCard.NONE

    def test_take_passive_effect(self, deck):
        item = take(deck, [1, 0])
        assert isinstance(item, DragStatusEffect)
        assert deck.passive.passive_effects[0].type == "None"

    def test_take_cooldown_modifier(self, deck):
        item = take(deck, [2, 0, 0])
        assert isinstance(item, DragCooldownModifier)
        assert isinstance(deck.cooldowns[0].modifiers[0], CooldownNone)

    def test_double_take_raises(self, deck):
        take(deck, [2, 1, 0, 2, 0])
        with pytest.raises(TreeContractError, match="already empty"):
            take(deck, [2, 1, 0, 2, 0])

    def test_take_none_card_raises(self, deck):
        with pytest.raises(TreeContractError):
            take(deck, [3, 1, 0, 1, 1])

    @pytest.mark.parametrize("path", [[], [1], [2], [0, 0]])
    def test_undetachable_paths(self, deck, path):
        with pytest.raises(TreeContractError):
            take(deck, path)

    def test_out_of_range(self, deck):
        with pytest.raises(TreeContractError, match="out of range"):
            take(deck, [2, 1, 0, 7])

    def test_bad_slot_type(self, deck):
        with pytest.raises(TreeContractError):
            take(deck, [2, 4, 0])

    def test_palette_is_not_taken(self):
        palette = PaletteCard(items=[DragProjectileModifier(value=OnHit())])
        with pytest.raises(TreeContractError):
            take(palette, [0])
        assert len(palette.items) == 1


class TestRoundTrip:
    """take followed by insert at the same path restores the tree."""

    @pytest.mark.parametrize("path", [
        [2, 1, 0],
        [2, 1, 0, 0],
        [2, 1, 0, 1],
        [2, 1, 0, 1, 0],
        [2, 1, 0, 2, 0],
        [2, 0, 0],
        [1, 0],
        [3, 1, 0, 0, 0],
        [3, 1, 0, 1, 0],
    ])
    def test_take_insert(self, deck, path):
        original = deck.model_copy(deep=True)
        item = take(deck, path)
        insert(deck, path, item)
        assert deck == original


# ---------------------------------------------------------------------------
# insert
# ---------------------------------------------------------------------------

class TestInsert:
    def test_cooldown_modifier_merges(self):
        cooldown = Cooldown.empty()
        insert(cooldown, [], _add_charge(1))
        assert cooldown.modifiers == [_add_charge(1).value]
        insert(cooldown, [], _add_charge(2))
        assert cooldown.modifiers == [_add_charge(3).value]

    def test_simple_modify_merges_by_kind(self, deck):
        insert(deck, [2, 1, 0], DragProjectileModifier(value=_speed(3)))
        modifiers = deck.cooldowns[0].abilities[0].card.modifiers
        speeds = [m for m in modifiers if isinstance(m, SimpleModify)]
        assert speeds == [_speed(5)]
        assert len(modifiers) == 3

    def test_other_kind_appends(self, deck):
        insert(deck, [2, 1, 0], DragProjectileModifier(value=_size(1)))
        modifiers = deck.cooldowns[0].abilities[0].card.modifiers
        assert modifiers[-1] == _size(1)
        assert len(modifiers) == 4

    def test_flag_modifiers_do_not_merge(self):
        card = ProjectileCard(modifiers=[NoEnemyFire()])
        insert(card, [], DragProjectileModifier(value=NoEnemyFire()))
        assert card.modifiers == [NoEnemyFire(), NoEnemyFire()]

    def test_merge_to_zero_is_pruned(self, deck):
        insert(deck, [2, 1, 0], DragProjectileModifier(value=_speed(-2)))
        modifiers = deck.cooldowns[0].abilities[0].card.modifiers
        assert [type(m) for m in modifiers] == [OnHit, LockToOwner]

    def test_negative_signed_kept(self, deck):
        insert(deck, [2, 1, 0], DragProjectileModifier(value=_speed(-5)))
        assert deck.cooldowns[0].abilities[0].card.modifiers[0] == _speed(-3)

    def test_zero_entries_pruned_empty_entries_kept(self):
        card = ProjectileCard(modifiers=[_size(0), ProjectileNone()])
        insert(card, [], DragProjectileModifier(value=NoEnemyFire()))
        assert card.modifiers == [ProjectileNone(), NoEnemyFire()]

    def test_fill_keeps_empty_siblings(self, deck):
        item = take(deck, [3, 1, 0, 1, 0])
        insert(deck, [3, 1, 0, 1, 0], item)
        cards = deck.cooldowns[1].abilities[0].card.cards
        assert cards == [ProjectileCard(), NoneCard()]

    def test_gravity_merges_by_direction(self):
        card = StatusEffectsCard(effects=[_gravity(1, DirectionCard.UP)])
        insert(card, [], DragStatusEffect(value=_gravity(2, DirectionCard.FORWARD)))
        insert(card, [], DragStatusEffect(value=_gravity(2, DirectionCard.UP)))
        assert card.effects == [_gravity(3, DirectionCard.UP), _gravity(2, DirectionCard.FORWARD)]

    def test_signed_cooldown_merges(self):
        cooldown = Cooldown.empty()
        decrease = SignedSimpleCooldownModifier(
            modifier_type=SignedSimpleCooldownModifierType.DECREASE_COOLDOWN, value=2,
        )
        insert(cooldown, [], DragCooldownModifier(value=decrease))
        insert(cooldown, [], DragCooldownModifier(value=decrease.model_copy(update={"value": -1})))
        assert cooldown.modifiers[0].value == 1
        assert len(cooldown.modifiers) == 1

    def test_passive_merges(self, deck):
        insert(deck, [1], DragStatusEffect(value=SimpleStatusEffect(
            effect_type=SimpleStatusEffectType.SPEED, stacks=2,
        )))
        assert deck.passive.passive_effects[0].stacks == 3

    def test_multicast_spread_merges(self, deck):
        insert(deck, [3, 1, 0], DragMultiCastModifier(value=Spread(value=1)))
        assert deck.cooldowns[1].abilities[0].card.modifiers == [Spread(value=3)]

    def test_multicast_base_card_appends(self, deck):
        insert(deck, [3, 1, 0], DragBaseCard(value=TriggerCard(trigger_id=2)))
        cards = deck.cooldowns[1].abilities[0].card.cards
        assert cards == [ProjectileCard(), NoneCard(), TriggerCard(trigger_id=2)]

    def test_fill_none_slot(self, deck):
        insert(deck, [3, 1, 0, 1, 1], DragBaseCard(value=TriggerCard()))
        assert deck.cooldowns[1].abilities[0].card.cards[1] == TriggerCard()

    def test_cooldown_base_card_adds_ability(self, deck):
        insert(deck, [2], DragBaseCard(value=TriggerCard()))
        abilities = deck.cooldowns[0].abilities
        assert len(abilities) == 2
        assert abilities[1].card == TriggerCard()

    def test_direction_overwrites(self, deck):
        insert(deck, [2, 1, 0, 2, 0], DragDirection(value=DirectionCard.FORWARD))
        assert deck.cooldowns[0].abilities[0].card.modifiers[2].direction is DirectionCard.FORWARD

    def test_wrong_family_raises(self, deck):
        with pytest.raises(TreeContractError):
            insert(deck, [2, 1, 0], DragDirection(value=DirectionCard.UP))

    def test_occupied_card_slot_raises(self, deck):
        with pytest.raises(TreeContractError):
            insert(deck, [2, 1, 0], DragBaseCard(value=ProjectileCard()))

    def test_wrong_family_into_empty_slot_raises(self, deck):
        with pytest.raises(TreeContractError):
            insert(deck, [3, 1, 0, 1, 1], DragMultiCastModifier(value=Spread()))

    def test_into_leaf_raises(self, deck):
        with pytest.raises(TreeContractError):
            insert(deck, [2, 1, 0, 0], DragProjectileModifier(value=_speed(1)))


# ---------------------------------------------------------------------------
# cleanup
# ---------------------------------------------------------------------------

class TestCleanup:
    def test_zero_entry_removed_after_decrement(self):
        card = ProjectileCard(modifiers=[_speed(1)])
        modify(card, [0], Modification.DECREASE)
        assert card.modifiers[0].value == 0
        cleanup(card, [])
        assert card == ProjectileCard(modifiers=[])

    def test_cleanup_at_entry_path(self):
        card = ProjectileCard(modifiers=[ProjectileNone(), NoEnemyFire()])
        cleanup(card, [0])
        assert card.modifiers == [NoEnemyFire()]

    def test_after_take(self, deck):
        take(deck, [2, 1, 0, 0])
        cleanup(deck, [2, 1, 0, 0])
        assert [type(m) for m in deck.cooldowns[0].abilities[0].card.modifiers] == [OnHit, LockToOwner]

    def test_none_card_removed_from_multicast(self, deck):
        cleanup(deck, [3, 1, 0, 1, 1])
        assert deck.cooldowns[1].abilities[0].card.cards == [ProjectileCard()]

    def test_last_ability_kept(self, deck):
        take(deck, [2, 1, 0])
        cleanup(deck, [2, 1, 0])
        abilities = deck.cooldowns[0].abilities
        assert len(abilities) == 1
        assert isinstance(abilities[0].card, NoneCard)

    def test_empty_ability_removed_when_others_remain(self):
        cooldown = Cooldown(abilities=[Ability(), Ability(card=TriggerCard())])
        cleanup(cooldown, [1, 0])
        assert [a.card for a in cooldown.abilities] == [TriggerCard()]

    def test_all_empty_abilities_keep_one(self):
        cooldown = Cooldown(abilities=[Ability(), Ability(), Ability()])
        cleanup(cooldown, [1, 2])
        assert len(cooldown.abilities) == 1

    def test_leaf_cleanup_is_noop(self, deck):
        before = deck.model_copy(deep=True)
        cleanup(deck, [2, 1, 0, 2, 0])
        assert deck == before

    def test_nested_card_slot_is_left_alone(self):
        card = ProjectileCard(modifiers=[
            OnHit(card=ProjectileCard(modifiers=[_speed(0), ProjectileNone()])),
        ])
        before = card.model_copy(deep=True)
        cleanup(card, [0, 0])
        assert card == before

    def test_prepared_nested_card_cleanup_skips_moved_card(self):
        inner = ProjectileCard(modifiers=[_speed(0)])
        card = ProjectileCard(modifiers=[OnHit(card=inner), NoEnemyFire()])
        pending = prepare_cleanup(card, [0, 0])
        item = take(card, [0, 0])
        target = Cooldown.empty()
        insert(target, [], item)
        pending()
        assert target.abilities[-1].card == ProjectileCard(modifiers=[_speed(0)])
        assert card.modifiers == [OnHit(), NoEnemyFire()]

    def test_negative_signed_survives(self):
        card = ProjectileCard(modifiers=[_speed(-1), ProjectileNone()])
        cleanup(card, [])
        assert card.modifiers == [_speed(-1)]

    def test_prepared_cleanup_survives_shift(self):
        card = ProjectileCard(modifiers=[
            _size(-1),
            OnHit(card=ProjectileCard(modifiers=[_size(1)])),
        ])
        pending = prepare_cleanup(card, [1, 0, 0])
        item = take(card, [1, 0, 0])
        insert(card, [], item)
        # the merge pruned the outer Size entry, so index 1 is gone
        with pytest.raises(TreeContractError):
            cleanup(card, [1, 0, 0])
        pending()
        assert card.modifiers == [OnHit(card=ProjectileCard())]


# ---------------------------------------------------------------------------
# Cache invalidation
# ---------------------------------------------------------------------------

class TestCacheInvalidation:
    def test_modify_clears_touched_cooldown(self, deck):
        _fill_caches(deck)
        modify(deck, [2, 1, 0, 0], Modification.INCREASE)
        assert _caches_cleared(deck.cooldowns[0])
        assert deck.cooldowns[1].cached_value is not None

    def test_take_clears(self, deck):
        _fill_caches(deck)
        take(deck, [3, 1, 0, 0, 0])
        assert _caches_cleared(deck.cooldowns[1])

    def test_insert_clears(self, deck):
        _fill_caches(deck)
        insert(deck, [2], _add_charge(1))
        assert _caches_cleared(deck.cooldowns[0])

    def test_cleanup_clears(self, deck):
        _fill_caches(deck)
        cleanup(deck, [3, 1, 0])
        assert _caches_cleared(deck.cooldowns[1])

    def test_passive_edit_leaves_cooldowns(self, deck):
        _fill_caches(deck)
        modify(deck, [1, 0], Modification.INCREASE)
        assert deck.cooldowns[0].cached_value is not None


# ---------------------------------------------------------------------------
# instantiate
# ---------------------------------------------------------------------------

class TestInstantiate:
    def test_returns_copy(self):
        template = DragProjectileModifier(value=OnHit())
        palette = PaletteCard(items=[template])
        item = instantiate(palette, [0])
        assert item == template
        assert item is not palette.items[0]
        assert item.value is not palette.items[0].value
        assert len(palette.items) == 1

    def test_copies_are_independent(self):
        palette = PaletteCard(items=[DragProjectileModifier(value=_speed(1))])
        item = instantiate(palette, [0])
        item.value.value = 9
        assert palette.items[0].value.value == 1

    def test_deep_path_raises(self):
        palette = PaletteCard(items=[DragProjectileModifier(value=OnHit())])
        with pytest.raises(TreeContractError):
            instantiate(palette, [0, 0])
