"""Ingest every PDF and DOCX file in the source documents directory, then embed the new chunks.

Usage:
    python scripts/process_source_documents.py [directory]

The directory defaults to ``SOURCE_DOCUMENTS_DIR``. A file that fails is
logged and the run moves on; failed documents are listed in the summary.
"""

import asyncio
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from interview_rag.infrastructure.config import get_settings  # noqa: E402
from interview_rag.infrastructure.database import engine, local_session  # noqa: E402
from interview_rag.infrastructure.embedding import get_embedding_provider  # noqa: E402
from interview_rag.infrastructure.logging import get_logger  # noqa: E402
from interview_rag.modules.document.models import DocumentStatus  # noqa: E402
from interview_rag.modules.document.services import DocumentProcessingService  # noqa: E402
from interview_rag.modules.embedding.services import EmbeddingGenerator  # noqa: E402
from interview_rag.modules.ingestion.extractor import EXTRACTORS, get_extension  # noqa: E402
from interview_rag.modules.storage import SQLAlchemyDocumentRepository  # noqa: E402

logger = get_logger(__name__)


async def process_source_documents(directory: str) -> int:
    """Process the directory and return the number of failed documents."""
    settings = get_settings()

    async with local_session() as db:
        repository = SQLAlchemyDocumentRepository(db)
        document_service = DocumentProcessingService(
            repository, chunk_max_size=settings.CHUNK_MAX_SIZE, chunk_overlap=settings.CHUNK_OVERLAP
        )
        generator = EmbeddingGenerator(
            repository,
            get_embedding_provider(),
            batch_size=settings.EMBEDDING_BATCH_SIZE,
            batch_delay=settings.EMBEDDING_BATCH_DELAY_MS / 1000,
        )

        files = sorted(os.listdir(directory))
        logger.info(f"Found {len(files)} files in {directory}")

        for name in files:
            file_path = os.path.join(directory, name)
            if get_extension(name) not in EXTRACTORS:
                logger.info(f"Skipping {name} (unsupported format)")
                continue

            try:
                document = await document_service.process_document(file_path, name)
                logger.info(
                    f"Processed {name}",
                    extra={
                        "document_id": document.id,
                        "status": document.status.value,
                        "total_chunks": document.total_chunks,
                        "total_tokens": document.total_tokens,
                    },
                )
            except Exception as e:
                logger.error(f"Error processing {name}: {e}")

        logger.info("Generating embeddings for pending chunks...")
        embedded = await generator.process_pending_chunks()
        logger.info(f"Embedding generation completed, {embedded} chunks embedded")

        documents = await document_service.get_documents()
        completed = [document for document in documents if document.status == DocumentStatus.COMPLETED]
        failed = [document for document in documents if document.status == DocumentStatus.FAILED]

        logger.info(
            "Summary",
            extra={"total_documents": len(documents), "completed": len(completed), "failed": len(failed)},
        )
        for document in failed:
            logger.warning(f"Failed document {document.original_name}: {document.error_message}")

        return len(failed)


async def main() -> None:
    directory = sys.argv[1] if len(sys.argv) > 1 else get_settings().SOURCE_DOCUMENTS_DIR

    if not os.path.isdir(directory):
        logger.error(f"Source documents directory not found: {directory}")
        sys.exit(1)

    try:
        await process_source_documents(directory)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
