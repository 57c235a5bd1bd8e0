"""
Task modules for document processing pipeline.

Exports: S3DownloadTask, ParsingTask, ChunkingTask, EmbeddingTask, VectorStoreTask
"""

from .chunking_task import ChunkingTask
from .embedding_task import EmbeddingTask
from .parsing_task import ParsingTask
from .s3_download_task import S3DownloadTask, is_transient_s3_error
from .vector_store_task import VectorStoreTask

__all__ = [
    "S3DownloadTask",
    "is_transient_s3_error",
    "ParsingTask",
    "ChunkingTask",
    "EmbeddingTask",
    "VectorStoreTask",
]
