"""Prompt text for the quality check, the styling analysis and look rendering.

The styling rules in ANALYSIS_PROMPT_TEMPLATE (height/weight bands, biotypes,
partner store) are instructions for the model, not logic applied here.
Placeholders: {context} receives the lines from build_context(), {partner}
and {partner_search_url} come from config.
"""

from atelier.config import INTERPOLATE_EDIT_CONSTRAINTS, PARTNER_SEARCH_URL, PARTNER_STORE
from atelier.models import OutfitSuggestion, UserMetrics, UserPreferences

QUALITY_PROMPT = (
    "Analyze image quality for face analysis. JSON only: "
    '{ "isValid": boolean, "score": number, "issues": string[], "advice": string, '
    '"details": { "lighting": "Good"|"Poor"|"Too Dark"|"Too Bright", '
    '"focus": "Sharp"|"Blurry", "framing": "Good"|"Bad" } }'
)

ANALYSIS_PROMPT_TEMPLATE = """ROLE: You are TEODORO, a master tailor and stylist. You provide "Sob Medida" (Bespoke) advice but ALSO act as a PERSONAL SHOPPER for partner stores.

CONTEXT:
{context}

TASK: Conduct a premium styling analysis. Return JSON.

1. GENDER & BIOMETRICS:
   - Identify gender. Determine Face Shape & Skin Undertone.

2. SILHOUETTE & PROPORTIONS (CRITICAL):
   - STRICTLY USE the provided Height and Weight to drive the style advice.
   - IF SHORT (< 1.70m men / < 1.60m women): Focus on ELONGATION strategies (monochromatic palettes, vertical stripes, high-waisted cuts, avoid heavy breaks or cuffed hems).
   - IF TALL (> 1.85m men / > 1.75m women): Focus on VISUAL BREAKS (cuffed pants, belts, color blocking, horizontal details) to balance the frame.
   - IF WEIGHT INDICATES ROBUSTNESS: Prioritize structure, verticality, and fabrics that shape without clinging.
   - IF WEIGHT INDICATES SLIMNESS: Suggest layering, textured fabrics, and horizontal lines to add visual presence.

3. BODY MORPHOLOGY:
   - Classify Biotype: Ampulheta, Triângulo, Triângulo Invertido, Retângulo, Oval.
   - Explain how cuts interact with the specific metrics provided (Height/Weight).

4. OUTFIT STRATEGY (4x Looks):
   - Mix of "Sob Medida" (Ideal world) and "Partner Store" (Practical).
   - PARTNER: The official partner is "{partner_upper}".
   - MANDATORY: For EACH item in the 'sugestoes_roupa' array, you MUST include a 'partner_suggestion' object.
   - 'partner_suggestion.storeName': MUST BE "{partner}".
   - 'partner_suggestion.productName': Use a concise version of the 'titulo' (e.g., "Vestido Longo Floral" or "Blazer Slim Azul").
   - 'partner_suggestion.link': Generate a valid search URL for {partner} using the key terms from the suggestion.
     Format: {partner_search_url}{{encoded_search_terms}}
     (Replace spaces with + or %20).

Output Schema:
{{
  "quality_check": {{ "valid": boolean, "reason": string }},
  "genero": "Masculino" | "Feminino",
  "formato_rosto_detalhado": string,
  "analise_facial": string,
  "analise_pele": string,
  "tom_pele_detectado": "Quente" | "Frio" | "Neutro" | "Oliva",
  "biotipo": "Ampulheta" | "Triângulo" | "Triângulo Invertido" | "Retângulo" | "Oval",
  "analise_corporal": string,
  "paleta_cores": [{{ "hex": string, "nome": string }}],
  "visagismo": {{
    "cabelo": {{ "estilo": string, "detalhes": string, "motivo": string }},
    "barba_ou_make": {{ "estilo": string, "detalhes": string, "motivo": string }},
    "acessorios": [string]
  }},
  "otica": {{ "armacao": string, "material": string, "detalhes": string, "motivo": string }},
  "sugestoes_roupa": [{{
      "titulo": string,
      "detalhes": string,
      "ocasiao": string,
      "motivo": string,
      "visagismo_sugerido": string,
      "termos_busca": string,
      "partner_suggestion": {{
          "storeName": "{partner}",
          "productName": string,
          "link": string
      }}
  }}]
}}"""

EDIT_PROMPT = (
    "Photo Retouch. High Fashion Editorial Style. Edit: {item}. "
    "Keep identity. Realistic. 8k. Texture details: High."
)

LOOK_MODIFICATION_PROMPT = (
    "Expert Tailor Request: Wear high-fashion outfit: {titulo}. Details: {detalhes}. "
    "Style: {ocasiao}. Perfectly fit for biotype: {biotipo}. "
    "Maintain sophisticated look. Keep face identity and pose."
)


def build_context(
    metrics: UserMetrics | None = None,
    preferences: UserPreferences | None = None,
) -> str:
    """Render the optional user context as one line per known fact."""
    lines: list[str] = []
    if metrics:
        if metrics.height is not None:
            lines.append(f"- HEIGHT: {metrics.height}m")
        if metrics.weight is not None:
            lines.append(f"- WEIGHT: {metrics.weight}kg")
    if preferences:
        if preferences.favorite_styles:
            lines.append(f"- PREFERRED STYLES: {', '.join(preferences.favorite_styles)}")
        if preferences.favorite_colors:
            lines.append(f"- PREFERRED COLORS: {preferences.favorite_colors}")
        if preferences.avoid_items:
            lines.append(f"- AVOID/HATE: {preferences.avoid_items}")
    return "\n".join(lines)


def build_analysis_prompt(
    metrics: UserMetrics | None = None,
    preferences: UserPreferences | None = None,
) -> str:
    return ANALYSIS_PROMPT_TEMPLATE.format(
        context=build_context(metrics, preferences),
        partner=PARTNER_STORE,
        partner_upper=PARTNER_STORE.upper(),
        partner_search_url=PARTNER_SEARCH_URL,
    )


def build_edit_prompt(
    item_description: str,
    modification: str,
    styling_hint: str | None = None,
    constraints: dict[str, str] | None = None,
    refinement: str | None = None,
) -> str:
    """Compose the retouch instruction; a refinement is appended as an override."""
    prompt = EDIT_PROMPT.format(item=item_description)
    if modification:
        prompt += f" Modification: {modification}."

    if INTERPOLATE_EDIT_CONSTRAINTS:
        if styling_hint:
            prompt += f" Grooming: {styling_hint}."
        if constraints:
            prompt += "".join(f" {key.capitalize()}: {value}." for key, value in constraints.items())

    if refinement:
        prompt += f" REFINEMENT REQUEST: {refinement}. IMPORTANT: Apply this change specifically."
    return prompt


def build_look_modification(outfit: OutfitSuggestion, biotype: str) -> str:
    return LOOK_MODIFICATION_PROMPT.format(
        titulo=outfit.titulo,
        detalhes=outfit.detalhes,
        ocasiao=outfit.ocasiao,
        biotipo=biotype,
    )
