"""Manual skin-tone override: recompute palette and makeup advice locally."""

from atelier.models import AnalysisResult, ColorSwatch

SKIN_TONE_DATA: dict[str, dict] = {
    "Quente": {
        "description": "Pele com fundo amarelado ou dourado. Bronzeia-se facilmente.",
        "palette": [
            ("#D4AF37", "Dourado"), ("#FF7F50", "Coral"),
            ("#8B4513", "Terra"), ("#556B2F", "Verde Oliva"),
        ],
        "makeup": "Tons terrosos, pêssego, dourado e bronzer. Batons alaranjados ou vermelhos quentes.",
    },
    "Frio": {
        "description": "Pele com fundo rosado ou azulado. Queima-se facilmente ao sol.",
        "palette": [
            ("#000080", "Azul Marinho"), ("#C0C0C0", "Prata"),
            ("#800080", "Roxo"), ("#DC143C", "Vermelho Cereja"),
        ],
        "makeup": "Tons de rosa, prata, cinza e azul. Batons em tons de frutas vermelhas ou rosa frio.",
    },
    "Neutro": {
        "description": "Equilíbrio entre quente e frio. Versátil com quase todas as cores.",
        "palette": [
            ("#40E0D0", "Turquesa"), ("#FF69B4", "Rosa Médio"),
            ("#F5F5DC", "Bege"), ("#708090", "Cinza Ardósia"),
        ],
        "makeup": "Pode transitar entre tons quentes e frios. Foco em iluminar naturalmente.",
    },
    "Oliva": {
        "description": "Fundo esverdeado ou amarelado frio. Comum em peles médias a escuras.",
        "palette": [
            ("#2F4F4F", "Verde Escuro"), ("#800000", "Vinho"),
            ("#4B0082", "Índigo"), ("#DAA520", "Ocre"),
        ],
        "makeup": "Tons de ameixa, beringela e metálicos profundos. Evite tons pastéis muito claros.",
    },
}


def palette_for(tone: str) -> list[ColorSwatch]:
    if tone not in SKIN_TONE_DATA:
        raise ValueError(f"Unknown skin tone: {tone}. Must be one of {list(SKIN_TONE_DATA)}")
    return [ColorSwatch(hex=hex_code, nome=name) for hex_code, name in SKIN_TONE_DATA[tone]["palette"]]


def apply_skin_tone(result: AnalysisResult, tone: str) -> AnalysisResult:
    """Return a copy of ``result`` re-targeted to ``tone``; the input is left as is."""
    palette = palette_for(tone)
    data = SKIN_TONE_DATA[tone]

    makeup = result.visagismo.barba_ou_make.model_copy(update={
        "detalhes": data["makeup"],
        "motivo": f"Recalculado para subtom {tone}",
    })
    visagismo = result.visagismo.model_copy(update={"barba_ou_make": makeup})

    return result.model_copy(update={
        "analise_pele": f"Tom Ajustado Manualmente: {tone}. {data['description']}",
        "paleta_cores": palette,
        "visagismo": visagismo,
    })
