"""
Translation Service

FastAPI endpoints for Chinook Jargon translation and the static dictionary file.
"""
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import FileResponse

from core import UpstreamError, validate_required_field
from logs import RequestContext, get_llm_logger
from .config import DICTIONARY_FILENAME, MISSING_INPUT_FIELD, TRANSLATION_ERROR_MESSAGE
from .schemas import TranslationRequest, TranslationResponse, ErrorResponse
from .translator import WordTranslator

logger = get_llm_logger(__name__)

# Create router
router = APIRouter(tags=["Translation"])


def get_translator(request: Request) -> WordTranslator:
    return request.app.state.translator


def get_static_root(request: Request) -> Path:
    return request.app.state.config.static_root


# =====================
# API Endpoints
# =====================

@router.get(
    f"/{DICTIONARY_FILENAME}",
    response_class=FileResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_dictionary(static_root: Path = Depends(get_static_root)):
    """
    Serve the Chinook word dictionary unmodified.

    **Returns:**
    - Raw contents of `chinookwords.json` as `application/json`
    """
    path = Path(static_root) / DICTIONARY_FILENAME
    if not path.is_file():
        logger.warning(f"[DICTIONARY] File not found | path={path}")
        raise HTTPException(status_code=404, detail="Dictionary file not found.")

    return FileResponse(path, media_type="application/json")


@router.post(
    "/translate",
    response_model=TranslationResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def translate_endpoint(
    request: TranslationRequest,
    translator: WordTranslator = Depends(get_translator),
):
    """
    Translate a word or phrase to Chinook Jargon.

    **Request Body:**
    - `inputWord`: Word or phrase to translate (required)

    **Returns:**
    - `translation`: Generated translation
    """
    with RequestContext() as request_id:
        try:
            word = validate_required_field(request.input_word, MISSING_INPUT_FIELD)
        except ValueError as e:
            logger.warning(f"[TRANSLATE] REJECTED | request_id={request_id} | reason={e}")
            raise HTTPException(status_code=400, detail=str(e))

        logger.info(f"[TRANSLATE] START | request_id={request_id} | chars={len(word)}")

        try:
            translation = await translator.translate(word)
        except UpstreamError as e:
            logger.error(
                f"[TRANSLATE] ERROR | request_id={request_id} | "
                f"status={e.status} | error={e}"
            )
            raise HTTPException(status_code=500, detail=TRANSLATION_ERROR_MESSAGE)
        except Exception as e:
            logger.exception(
                f"[TRANSLATE] ERROR | request_id={request_id} | unexpected error={e}"
            )
            raise HTTPException(status_code=500, detail=TRANSLATION_ERROR_MESSAGE)

        logger.info(
            f"[TRANSLATE] END | request_id={request_id} | output_chars={len(translation)}"
        )
        return TranslationResponse(translation=translation)
