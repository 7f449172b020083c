"""FastAPI application exposing backup and restore of Milvus collections."""
