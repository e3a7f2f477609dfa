"""
Texte riche d'auteur — assainissement par liste blanche avant insertion brute.

sanitize_html("<b>Q</b><script>alert(1)</script>") → "<b>Q</b>"

Balises de mise en forme courantes conservées ; scripts, styles, gestionnaires
on* et URLs javascript: supprimés (valeurs par défaut de nh3).
"""
from typing import Any

import nh3


def sanitize_html(text: Any) -> str:
    if text is None:
        return ""
    return nh3.clean(str(text))
