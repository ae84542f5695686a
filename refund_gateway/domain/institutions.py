"""Institution name normalization for rate-table lookups and display"""

from typing import Dict, List, Optional

# Display name (calculator form) -> rate table key
DISPLAY_NAME_TO_KEY: Dict[str, str] = {
    "Santander": "BANCO SANTANDER",
    "BCI": "BANCO BCI",
    "Lider BCI": "LIDER-BCI",
    "Scotiabank": "SCOTIABANK",
    "Chile": "BANCO CHILE",
    "Security": "BANCO SECURITY",
    "Itaú - Corpbanca": "BANCO ITAU-CORPBANCA",
    "BICE": "BANCO BICE",
    "Estado": "BANCO ESTADO",
    "Banco Ripley": "BANCO RIPLEY",
    "Falabella": "BANCO FALABELLA",
    "Consorcio": "BANCO CONSORCIO",
    "Condell": "BANCO CONSORCIO",
    "Internacional": "BANCO CONSORCIO",
    "Cencosud": "BANCO CENCOSUD",
    "Coopeuch": "COOPEUCH",
    "Cooperativas": "COOPERATIVAS",
    "Financoop": "COOPEUCH",
    "Ahorrocoop": "COOPEUCH",
    "Libercoop": "COOPEUCH",
    "Capual": "COOPEUCH",
    "Bancrece": "COOPEUCH",
    "Islacoop": "COOPEUCH",
    "Forum": "FORUM",
    "Tanner": "TANNER",
}

# Persisted institutionId (lower case) -> rate table key
INSTITUTION_ID_TO_KEY: Dict[str, str] = {
    "santander": "BANCO SANTANDER",
    "bci": "BANCO BCI",
    "scotiabank": "SCOTIABANK",
    "chile": "BANCO CHILE",
    "security": "BANCO SECURITY",
    "itau-corpbanca": "BANCO ITAU-CORPBANCA",
    "itau": "BANCO ITAÚ",
    "bice": "BANCO BICE",
    "estado": "BANCO ESTADO",
    "ripley": "BANCO RIPLEY",
    "falabella": "BANCO FALABELLA",
    "consorcio": "BANCO CONSORCIO",
    "coopeuch": "COOPEUCH",
    "cencosud": "BANCO CENCOSUD",
    "lider-bci": "LIDER-BCI",
    "forum": "FORUM",
    "tanner": "TANNER",
    "cooperativas": "COOPERATIVAS",
}

# Persisted institutionId -> commercial name shown in reports
DISPLAY_HOMOLOGATIONS: Dict[str, str] = {
    "chile": "BANCO DE CHILE",
}

AVAILABLE_INSTITUTIONS: List[str] = [
    "Santander",
    "BCI",
    "Lider BCI",
    "Scotiabank",
    "Chile",
    "Security",
    "Itaú - Corpbanca",
    "BICE",
    "Estado",
    "Banco Ripley",
    "Falabella",
    "Consorcio",
    "Coopeuch",
    "Cencosud",
    "Forum",
    "Tanner",
    "Cooperativas",
]


def resolve_institution(display_name: str) -> str:
    """Map a form display name to its rate table key; unknown names pass through upper-cased"""
    return DISPLAY_NAME_TO_KEY.get(display_name) or display_name.upper()


def resolve_institution_id(institution_id: Optional[str]) -> str:
    """Map a persisted institutionId to its rate table key (case-insensitive)"""
    institution_id = institution_id or ""
    return INSTITUTION_ID_TO_KEY.get(institution_id.lower()) or institution_id.upper()


def institution_display_name(institution_id: Optional[str]) -> str:
    """Commercial name for an institutionId, or the id itself when not homologated"""
    if not institution_id:
        return "N/A"
    return DISPLAY_HOMOLOGATIONS.get(institution_id.lower().strip()) or institution_id
