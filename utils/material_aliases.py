"""
Material name aliases and mapping of common grade names to stress table codes.
"""

import logging
import re

logger = logging.getLogger("pipe-thickness-mcp.material_aliases")

# Mapping of common aliases (normalized) to stress table material codes
MATERIAL_NAME_MAP = {
    # Seamless carbon steel
    'a106b': 'ASTM_A106_Grade_B',
    'a106grb': 'ASTM_A106_Grade_B',
    'a106gradeb': 'ASTM_A106_Grade_B',
    'astma106b': 'ASTM_A106_Grade_B',
    'astma106grb': 'ASTM_A106_Grade_B',
    'astma106gradeb': 'ASTM_A106_Grade_B',

    # ERW carbon steel
    'a53b': 'ASTM_A53_Grade_B',
    'a53grb': 'ASTM_A53_Grade_B',
    'a53gradeb': 'ASTM_A53_Grade_B',
    'astma53b': 'ASTM_A53_Grade_B',
    'astma53gradeb': 'ASTM_A53_Grade_B',

    # Line pipe
    'api5lb': 'API_5L_Grade_B',
    'api5lgrb': 'API_5L_Grade_B',
    'api5lgradeb': 'API_5L_Grade_B',
    '5lb': 'API_5L_Grade_B',

    # Austenitic stainless
    'tp304': 'ASTM_A312_TP304',
    'a312tp304': 'ASTM_A312_TP304',
    'astma312tp304': 'ASTM_A312_TP304',
    'ss304': 'ASTM_A312_TP304',
    '304': 'ASTM_A312_TP304',
    'tp316': 'ASTM_A312_TP316',
    'a312tp316': 'ASTM_A312_TP316',
    'astma312tp316': 'ASTM_A312_TP316',
    'ss316': 'ASTM_A312_TP316',
    '316': 'ASTM_A312_TP316',

    # Chrome-moly
    'p11': 'ASTM_A335_P11',
    'a335p11': 'ASTM_A335_P11',
    'astma335p11': 'ASTM_A335_P11',
    'p22': 'ASTM_A335_P22',
    'a335p22': 'ASTM_A335_P22',
    'astma335p22': 'ASTM_A335_P22',

    # Generic names (approximations)
    'carbonsteel': 'ASTM_A106_Grade_B',
    'cs': 'ASTM_A106_Grade_B',
    'stainlesssteel': 'ASTM_A312_TP304',
    'ss': 'ASTM_A312_TP304',
    'a106': 'ASTM_A106_Grade_B',
    'a53': 'ASTM_A53_Grade_B',
}

# Aliases that pick a representative grade rather than an exact one
APPROXIMATE_ALIASES = {'carbonsteel', 'cs', 'stainlesssteel', 'ss', 'a106', 'a53'}


def normalize_material_name(name: str) -> str:
    """Lowercase and strip spaces, underscores, hyphens and dots."""
    if not name:
        return name
    return re.sub(r"[\s_\-\.]+", "", name.lower())


def map_material_code(name: str, warn_on_fallback: bool = True) -> str:
    """
    Map a common material name or alias to a stress table material code.

    Args:
        name: Input material name (can be an alias or an exact code)
        warn_on_fallback: Whether to log warnings for approximate mappings

    Returns:
        Stress table material code; unknown names are returned unchanged so the
        stress table can report them
    """
    if not name:
        return name

    normalized = normalize_material_name(name)
    mapped = MATERIAL_NAME_MAP.get(normalized)
    if mapped is None:
        return name.strip()

    if warn_on_fallback and normalized in APPROXIMATE_ALIASES:
        logger.warning(
            f"'{name}' mapped to '{mapped}'. This is a representative grade; "
            "provide the exact material code for design work."
        )
    return mapped
