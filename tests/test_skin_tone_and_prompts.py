import pytest

from atelier.models import AnalysisResult, UserMetrics, UserPreferences
from atelier.prompts import build_analysis_prompt, build_context, build_edit_prompt
from atelier.skin_tone import SKIN_TONE_DATA, apply_skin_tone
from tests.helpers import analysis_payload


@pytest.fixture
def result() -> AnalysisResult:
    return AnalysisResult.model_validate(analysis_payload(n_looks=2))


@pytest.mark.parametrize("tone", list(SKIN_TONE_DATA))
def test_skin_tone_override_recomputes_locally(result, tone):
    updated = apply_skin_tone(result, tone)

    assert updated.analise_pele.startswith(f"Tom Ajustado Manualmente: {tone}.")
    assert [c.hex for c in updated.paleta_cores] == [h for h, _ in SKIN_TONE_DATA[tone]["palette"]]
    assert updated.visagismo.barba_ou_make.detalhes == SKIN_TONE_DATA[tone]["makeup"]
    assert updated.visagismo.barba_ou_make.motivo == f"Recalculado para subtom {tone}"
    assert updated.visagismo.barba_ou_make.estilo == "Natural"
    assert updated.visagismo.cabelo == result.visagismo.cabelo
    assert updated.sugestoes_roupa == result.sugestoes_roupa


def test_skin_tone_override_leaves_input_alone(result):
    before = result.model_dump()
    apply_skin_tone(result, "Oliva")
    assert result.model_dump() == before


def test_unknown_skin_tone(result):
    with pytest.raises(ValueError):
        apply_skin_tone(result, "Azul")


def test_context_lines():
    context = build_context(
        UserMetrics(height=1.82, weight=""),
        UserPreferences(favoriteStyles=["Clássico", "Minimalista"], avoidItems="estampas"),
    )
    assert context.splitlines() == [
        "- HEIGHT: 1.82m",
        "- PREFERRED STYLES: Clássico, Minimalista",
        "- AVOID/HATE: estampas",
    ]
    assert build_context() == ""


def test_analysis_prompt_fixes_partner_store():
    prompt = build_analysis_prompt(UserMetrics(height=1.6))
    assert "ROLE: You are TEODORO" in prompt
    assert "- HEIGHT: 1.6m" in prompt
    assert "'partner_suggestion.storeName': MUST BE \"Riachuelo\"" in prompt
    assert "https://www.riachuelo.com.br/busca?q={encoded_search_terms}" in prompt
    assert '"sugestoes_roupa": [{' in prompt


def test_edit_prompt_without_modification():
    prompt = build_edit_prompt("jacket", "")
    assert prompt == (
        "Photo Retouch. High Fashion Editorial Style. Edit: jacket. "
        "Keep identity. Realistic. 8k. Texture details: High."
    )


def test_metrics_are_kept_as_typed():
    metrics = UserMetrics(height=" 1,65 ", weight=0)
    assert metrics.height == "1,65"
    assert build_context(metrics).splitlines() == ["- HEIGHT: 1,65m", "- WEIGHT: 0kg"]
    assert UserMetrics(height="", weight=None).height is None
