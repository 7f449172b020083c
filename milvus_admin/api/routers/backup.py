"""Backup and restore API endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from ..models import (
    BackupCreatedResponse,
    ErrorResponse,
    BackupFiles,
    BackupListResponse,
    DeleteResponse,
    RestoreRequest,
    RestoreResponse,
)
from ..dependencies import get_backup_manager
from ...backup import BackupManager
from ..._utils import logger

router = APIRouter(
    prefix="/backup",
    tags=["backup"],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)


@router.get("/list", response_model=BackupListResponse)
async def list_backups(
    backup_manager: BackupManager = Depends(get_backup_manager)
) -> BackupListResponse:
    """List complete backup pairs, newest first."""
    backups = await backup_manager.list_backups()
    return BackupListResponse(backups=backups)


@router.post("/restore", response_model=RestoreResponse)
async def restore_backup(
    body: RestoreRequest,
    backup_manager: BackupManager = Depends(get_backup_manager)
) -> RestoreResponse:
    """Restore a collection from a schema file and a data file in the backup directory."""
    result = await backup_manager.restore_backup(
        body.schema_file,
        body.data_file,
        create_if_missing=body.create_if_not_exists
    )

    return RestoreResponse(
        message=f"Collection {result.collection_name} restored successfully",
        collection=result.collection_name,
        record_count=result.record_count,
        insert_count=result.insert_count,
        created=result.created
    )


@router.get("/files/{filename}")
async def download_artifact(
    filename: str,
    backup_manager: BackupManager = Depends(get_backup_manager)
) -> FileResponse:
    """Download a schema (.json) or data (.jsonl) artifact."""
    path = await backup_manager.get_artifact_path(filename)
    media_type = "application/json" if path.suffix == ".json" else "application/x-ndjson"

    return FileResponse(path=path, media_type=media_type, filename=path.name)


@router.post("/{collection}/backup", response_model=BackupCreatedResponse)
async def create_backup(
    collection: str,
    backup_manager: BackupManager = Depends(get_backup_manager)
) -> BackupCreatedResponse:
    """Export a collection's schema and records to the backup directory."""
    result = await backup_manager.create_backup(collection)
    logger.info(f"Backup of {collection} written: {result.schema_file}, {result.data_file}")

    return BackupCreatedResponse(
        message="Backup created successfully",
        files=BackupFiles(schema_file=result.schema_file, data=result.data_file),
        record_count=result.record_count
    )


@router.delete("/{backup_name}", response_model=DeleteResponse)
async def delete_backup(
    backup_name: str,
    backup_manager: BackupManager = Depends(get_backup_manager)
) -> DeleteResponse:
    """Delete the schema and data files of a backup."""
    deleted = await backup_manager.delete_backup(backup_name)

    return DeleteResponse(deleted=deleted, message=f"Backup {backup_name} deleted successfully")
