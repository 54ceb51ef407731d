from ..infrastructure.app_factory import create_application
from ..infrastructure.config.settings import get_settings
from ..interfaces.api import router as api_router

settings = get_settings()

app = create_application(
    router=api_router,
    settings=settings,
    summary="Document retrieval for interview practice",
    description="""
    # Interview RAG API

    Knowledge base behind the UX interview practice assistant:

    * **Ingestion**: PDF and DOCX files are extracted, normalized and chunked
    * **Embeddings**: chunks are embedded in batches by a backfill
    * **Retrieval**: cosine-similarity search and prompt-ready context blocks
    """,
)
