"""Nutrition heuristics for ranking combo candidates."""

from collections.abc import Iterable
from dataclasses import dataclass

from howl2go.domain.combos import ComboPreferences, NutritionalFocus
from howl2go.domain.foods import FoodItem

HIGH_SUGAR_G = 15.0
LOW_SUGAR_PREFERENCE_G = 8.0
HIGH_SODIUM_MG = 700.0
SUGAR_PENALTY = 0.5
SODIUM_PREFERENCE_FACTOR = 0.6
SUGAR_PREFERENCE_FACTOR = 0.7

CALORIE_BALANCE_WEIGHT = 0.45
PROTEIN_COMPLEMENT_WEIGHT = 0.4
SUGAR_WEIGHT = 0.15

PROTEIN_ENERGY_TARGET = 0.30
KCAL_PER_G_PROTEIN = 4.0

COMPATIBILITY_WEIGHT = 0.6
MACRO_BALANCE_WEIGHT = 0.4
FOCUS_WEIGHT = 0.25

LOW_CALORIE_CEILING = 600.0
HIGH_PROTEIN_TARGET_G = 30.0
LOW_SUGAR_CEILING_G = 16.0
LOW_SODIUM_CEILING_MG = 1400.0


@dataclass(frozen=True)
class NutritionProfile:
    """Nutrient values with missing data read as zero."""

    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float
    sugar_g: float
    sodium_mg: float


def normalize_nutrition(item: FoodItem) -> NutritionProfile:
    """Return the item's nutrients, defaulting missing values to zero."""
    return NutritionProfile(
        calories=_value(item.calories),
        protein_g=_value(item.protein),
        fat_g=_value(item.total_fat),
        carbs_g=_value(item.carbs),
        sugar_g=_value(item.sugars),
        sodium_mg=_value(item.sodium),
    )


def compatibility(
    main: FoodItem,
    candidate: FoodItem,
    preferences: ComboPreferences | None = None,
) -> float:
    """Score in [0, 1] how well a candidate complements the main item.

    Rewards calorie balance and protein that complements a carb-heavy main,
    and penalizes pairing two sugar-heavy items. The low-sodium and low-sugar
    preferences scale the score down for candidates above their thresholds.
    """
    prefs = preferences or ComboPreferences()
    main_n = normalize_nutrition(main)
    cand_n = normalize_nutrition(candidate)

    both_high_sugar = main_n.sugar_g > HIGH_SUGAR_G and cand_n.sugar_g > HIGH_SUGAR_G
    sugar_term = SUGAR_PENALTY if both_high_sugar else 1.0

    if main_n.carbs_g > 0:
        protein_ratio = cand_n.protein_g / main_n.carbs_g
    else:
        protein_ratio = cand_n.protein_g / 10
    protein_term = _clamp01(protein_ratio * 2)

    max_cal = max(1.0, main_n.calories)
    calorie_term = _clamp01(1 - abs(main_n.calories - cand_n.calories) / max_cal)

    score = (
        CALORIE_BALANCE_WEIGHT * calorie_term
        + PROTEIN_COMPLEMENT_WEIGHT * protein_term
        + SUGAR_WEIGHT * sugar_term
    )
    if prefs.low_sodium and cand_n.sodium_mg > HIGH_SODIUM_MG:
        score *= SODIUM_PREFERENCE_FACTOR
    if prefs.low_sugar and cand_n.sugar_g > LOW_SUGAR_PREFERENCE_G:
        score *= SUGAR_PREFERENCE_FACTOR
    return _clamp01(score)


def macro_balance(candidate: FoodItem) -> float:
    """Share of energy from protein relative to the target, in [0, 1]."""
    profile = normalize_nutrition(candidate)
    if profile.calories <= 0:
        return 0.0
    protein_share = profile.protein_g * KCAL_PER_G_PROTEIN / profile.calories
    return _clamp01(protein_share / PROTEIN_ENERGY_TARGET)


def focus_adjustment(candidate: FoodItem, foci: Iterable[NutritionalFocus]) -> float:
    """Average bonus (+) or penalty (-) in [-1, 1] across active foci."""
    profile = normalize_nutrition(candidate)
    terms = []
    for focus in sorted(set(foci), key=lambda value: value.value):
        if focus is NutritionalFocus.LOW_CALORIE:
            terms.append(1 - 2 * _clamp01(profile.calories / LOW_CALORIE_CEILING))
        elif focus is NutritionalFocus.HIGH_PROTEIN:
            terms.append(2 * _clamp01(profile.protein_g / HIGH_PROTEIN_TARGET_G) - 1)
        elif focus is NutritionalFocus.LOW_SUGAR:
            terms.append(1 - 2 * _clamp01(profile.sugar_g / LOW_SUGAR_CEILING_G))
        elif focus is NutritionalFocus.LOW_SODIUM:
            terms.append(1 - 2 * _clamp01(profile.sodium_mg / LOW_SODIUM_CEILING_MG))
    if not terms:
        return 0.0
    return sum(terms) / len(terms)


def nutritional_score(
    main: FoodItem,
    candidate: FoodItem,
    preferences: ComboPreferences | None = None,
    focus: NutritionalFocus | None = None,
) -> float:
    """Combined nutritional fit of a candidate for the main item, in [0, 1]."""
    prefs = preferences or ComboPreferences()
    foci = prefs.foci()
    if focus is not None:
        foci.add(focus)
    raw = (
        COMPATIBILITY_WEIGHT * compatibility(main, candidate, prefs)
        + MACRO_BALANCE_WEIGHT * macro_balance(candidate)
        + FOCUS_WEIGHT * focus_adjustment(candidate, foci)
    )
    return _clamp01(raw)


def _value(raw: float | None) -> float:
    return float(raw) if raw is not None else 0.0


def _clamp01(value: float) -> float:
    if value != value or value in (float("inf"), float("-inf")):
        return 0.0
    return max(0.0, min(1.0, value))
