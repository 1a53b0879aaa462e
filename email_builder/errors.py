"""
Erreurs du moteur d'édition email.

Politique de propagation :
  - création / import → erreurs bruyantes (bug ou données corrompues)
  - cible disparue pendant un drag & drop → no-op silencieux côté arbre
"""


class EmailBuilderError(Exception):
    """Classe parente de toutes les erreurs email_builder."""


class UnsupportedKindError(EmailBuilderError):
    """Type de bloc inconnu demandé à la factory."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Type de bloc non supporté : {kind!r}")


class LockedBlockError(EmailBuilderError):
    """Mutation tentée sur un bloc verrouillé (ou contenu dans un layout verrouillé)."""

    def __init__(self, block_id: str):
        self.block_id = block_id
        super().__init__(f"Bloc verrouillé : {block_id}")


class TargetNotFoundError(EmailBuilderError):
    """Bloc, layout ou colonne référencé introuvable (ex : supprimé entre-temps)."""

    def __init__(self, target: str):
        self.target = target
        super().__init__(f"Cible introuvable : {target}")


class MediaUnavailableError(EmailBuilderError):
    """Média impossible à charger (probe image / vidéo)."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        super().__init__(f"Média indisponible : {url}" + (f" ({reason})" if reason else ""))


class InvalidImportError(EmailBuilderError):
    """Blob importé (document, bloc, sauvegarde) qui ne respecte pas le schéma attendu."""
