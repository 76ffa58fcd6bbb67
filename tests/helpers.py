"""Builders for test images, Gemini responses and a scripted fake client."""

import base64
import io
import json

from google.genai import types
from PIL import Image


def make_image(width: int, height: int, fmt: str = "PNG") -> str:
    """Solid-colour test image as raw base64."""
    buf = io.BytesIO()
    Image.new("RGB", (width, height), (180, 120, 90)).save(buf, format=fmt)
    return base64.b64encode(buf.getvalue()).decode("ascii")


def look(title: str, **extra) -> dict:
    data = {
        "titulo": title,
        "detalhes": f"{title} em linho",
        "ocasiao": "Trabalho",
        "motivo": "Alonga a silhueta",
        "visagismo_sugerido": "Cabelo preso",
        "termos_busca": title.lower(),
        "partner_suggestion": {
            "storeName": "Riachuelo",
            "productName": title,
            "link": "https://www.riachuelo.com.br/busca?q=" + title.replace(" ", "+"),
        },
    }
    data.update(extra)
    return data


def analysis_payload(n_looks: int = 4) -> dict:
    return {
        "quality_check": {"valid": True, "reason": ""},
        "genero": "Feminino",
        "formato_rosto_detalhado": "Oval",
        "analise_facial": "Traços suaves",
        "analise_pele": "Subtom quente",
        "tom_pele_detectado": "Quente",
        "biotipo": "Ampulheta",
        "analise_corporal": "Cintura marcada",
        "paleta_cores": [{"hex": "#D4AF37", "nome": "Dourado"}],
        "visagismo": {
            "cabelo": {"estilo": "Ondas", "detalhes": "Médio", "motivo": "Equilíbrio"},
            "barba_ou_make": {"estilo": "Natural", "detalhes": "Pêssego", "motivo": "Subtom"},
            "acessorios": ["Brincos dourados"],
        },
        "otica": {"armacao": "Gatinho", "material": "Acetato", "detalhes": "", "motivo": ""},
        "sugestoes_roupa": [look(f"Look {i}") for i in range(n_looks)],
    }


def text_response(text: str) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=[types.Part(text=text)]))]
    )


def json_response(payload: dict, fenced: bool = False) -> types.GenerateContentResponse:
    text = json.dumps(payload, ensure_ascii=False)
    if fenced:
        text = f"```json\n{text}\n```"
    return text_response(text)


def image_response(data: bytes = b"\x89PNG fake", mime_type: str = "image/png") -> types.GenerateContentResponse:
    parts = [
        types.Part(text="Here is the edited photo."),
        types.Part(inline_data=types.Blob(data=data, mime_type=mime_type)),
    ]
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=parts))]
    )


class StatusError(Exception):
    def __init__(self, status: int, message: str = "remote failure"):
        super().__init__(message)
        self.status = status


class FakeModels:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls: list[dict] = []

    def generate_content(self, *, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


class FakeClient:
    def __init__(self, responses):
        self.models = FakeModels(responses)


