"""Section title strings for the supported languages."""
from __future__ import annotations

SUPPORTED_LANGUAGES: dict[str, str] = {
    "en": "English",
    "fr": "French",
}

RESOURCES: dict[str, dict[str, str]] = {
    "en": {
        "account.tab_balances": "Balances",
        "account.tab_collectibles": "Collectibles",
        "account.tab_pools": "Pools",
        "account.tab_savings": "Savings",
        "account.small_balances": "Small balances",
        "button.cancel": "Cancel",
        "button.edit": "Edit",
    },
    "fr": {
        "account.tab_balances": "Soldes",
        "account.tab_collectibles": "Objets de collection",
        "account.tab_pools": "Pools",
        "account.tab_savings": "Épargne",
        "account.small_balances": "Petits soldes",
        "button.cancel": "Annuler",
        "button.edit": "Modifier",
    },
}


def translate(key: str, language: str = "en") -> str:
    """Return the string for *key*, falling back to English, then the key."""
    table = RESOURCES.get(language, {})
    if key in table:
        return table[key]
    return RESOURCES["en"].get(key, key)


__all__ = ["RESOURCES", "SUPPORTED_LANGUAGES", "translate"]
