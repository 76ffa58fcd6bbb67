from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SkinTone = Literal["Quente", "Frio", "Neutro", "Oliva"]
Biotype = Literal["Ampulheta", "Triângulo", "Triângulo Invertido", "Retângulo", "Oval"]


class _Model(BaseModel):
    # Wire names follow the JSON the model is asked to produce
    model_config = ConfigDict(populate_by_name=True)


# --- user input ---

class UserMetrics(_Model):
    # Free text as typed ("1,65" or "1.65"); only passed through to the prompt
    height: str | None = None
    weight: str | None = None

    @field_validator("height", "weight", mode="before")
    @classmethod
    def _as_text(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return f"{value:g}"
        if isinstance(value, str):
            return value.strip() or None
        return value


class UserPreferences(_Model):
    favorite_styles: list[str] = Field(default_factory=list, alias="favoriteStyles")
    favorite_colors: str | None = Field(default=None, alias="favoriteColors")
    avoid_items: str | None = Field(default=None, alias="avoidItems")


# --- quality check ---

class QualityDetails(_Model):
    lighting: Literal["Good", "Poor", "Too Dark", "Too Bright"] = "Good"
    focus: Literal["Sharp", "Blurry"] = "Sharp"
    framing: Literal["Good", "Bad"] = "Good"


class ImageQualityResult(_Model):
    is_valid: bool = Field(alias="isValid")
    score: float
    issues: list[str] = Field(default_factory=list)
    advice: str = ""
    details: QualityDetails = Field(default_factory=QualityDetails)


# --- analysis ---

class QualityCheck(_Model):
    valid: bool = True
    reason: str = ""


class ColorSwatch(_Model):
    hex: str
    nome: str


class VisagismAdvice(_Model):
    estilo: str = ""
    detalhes: str = ""
    motivo: str = ""


class Visagism(_Model):
    cabelo: VisagismAdvice = Field(default_factory=VisagismAdvice)
    barba_ou_make: VisagismAdvice = Field(default_factory=VisagismAdvice)
    acessorios: list[str] = Field(default_factory=list)


class Eyewear(_Model):
    armacao: str = ""
    material: str = ""
    detalhes: str = ""
    motivo: str = ""


class PartnerSuggestion(_Model):
    store_name: str = Field(alias="storeName")
    product_name: str = Field(alias="productName")
    link: str


class OutfitSuggestion(_Model):
    titulo: str
    detalhes: str
    ocasiao: str
    motivo: str
    visagismo_sugerido: str | None = None
    termos_busca: str | None = None
    partner_suggestion: PartnerSuggestion

    # filled in client side, never by the analysis call
    generated_image: str | None = Field(default=None, alias="generatedImage")
    last_modification_prompt: str | None = Field(default=None, alias="lastModificationPrompt")
    is_favorite: bool = Field(default=False, alias="isFavorite")
    user_note: str | None = Field(default=None, alias="userNote")


class AnalysisResult(_Model):
    quality_check: QualityCheck = Field(default_factory=QualityCheck)
    genero: Literal["Masculino", "Feminino"]
    formato_rosto_detalhado: str
    analise_facial: str = ""
    analise_pele: str = ""
    tom_pele_detectado: SkinTone
    biotipo: Biotype
    analise_corporal: str = ""
    paleta_cores: list[ColorSwatch]
    visagismo: Visagism = Field(default_factory=Visagism)
    otica: Eyewear = Field(default_factory=Eyewear)
    sugestoes_roupa: list[OutfitSuggestion] = Field(min_length=1)


# --- HTTP request / response bodies ---

class QualityCheckRequest(_Model):
    image: str


class AnalyzeRequest(_Model):
    image: str
    metrics: UserMetrics | None = None
    preferences: UserPreferences | None = None


class AnalyzeResponse(_Model):
    status: str
    session_id: str | None = None
    result: AnalysisResult | None = None
    error: str | None = None


class LookRequest(_Model):
    refinement: str | None = None


class LookResponse(_Model):
    status: str
    index: int | None = None
    generated_image: str | None = Field(default=None, alias="generatedImage")
    error: str | None = None


class BatchResponse(_Model):
    status: str
    generated: int = 0
    pending: int = 0
    result: AnalysisResult | None = None
    error: str | None = None


class SkinToneRequest(_Model):
    tone: SkinTone


class NoteRequest(_Model):
    note: str


class SessionResponse(_Model):
    status: str
    session_id: str | None = None
    skin_tone: SkinTone | None = None
    result: AnalysisResult | None = None
    error: str | None = None


class HealthResponse(_Model):
    status: str
