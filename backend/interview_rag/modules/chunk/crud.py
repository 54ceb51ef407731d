"""CRUD operations for chunk entities using FastCRUD."""

from fastcrud import FastCRUD

from .models import DocumentChunk

chunk_crud: FastCRUD = FastCRUD(DocumentChunk)
