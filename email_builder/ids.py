"""Génération des identifiants (blocs, colonnes, items imbriqués)."""
import uuid


def new_id(prefix: str = "comp") -> str:
    """Identifiant unique préfixé : comp_…, col_…, social_…, btn_…"""
    return f"{prefix}_{uuid.uuid4().hex[:16]}"
