"""Upload, account, report and reset endpoints."""
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from app.interfaces.http.deps import get_ledger_service, get_upload_storage
from app.modules.ledger import (
    AccountNotFoundError,
    LedgerService,
    LedgerStoreError,
    SnapshotConflictError,
    TransactionsNotFoundError,
)
from app.schemas import (
    AccountResponse,
    MessageResponse,
    RejectedTransactionResponse,
    ReportResponse,
    TransactionResponse,
    UploadResponse,
)
from app.services import UploadStorage, UploadStorageError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/upload", response_model=UploadResponse, summary="Upload a CSV file of transactions")
async def upload_transactions(
    file: Optional[UploadFile] = File(None),
    service: LedgerService = Depends(get_ledger_service),
    storage: UploadStorage = Depends(get_upload_storage),
) -> UploadResponse:
    if file is None or not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No files were uploaded.")

    try:
        staged = await storage.stage(file)
        text = staged.read_text()
    except UnicodeDecodeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File must be UTF-8 encoded CSV") from exc
    except UploadStorageError as exc:
        logger.exception("Failed to stage upload %s", file.filename)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to store file") from exc

    logger.info("Processing upload %s (sha256 %s)", staged.original_name, staged.checksum_sha256)
    try:
        result = await service.ingest(text)
    except SnapshotConflictError as exc:
        logger.warning("Upload %s lost a concurrent write: %s", file.filename, exc)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Ledger changed while processing the upload, please retry",
        ) from exc
    except LedgerStoreError as exc:
        logger.exception("Failed to process upload %s", file.filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to process transactions"
        ) from exc

    return UploadResponse(
        message="File uploaded and transactions processed.",
        accounts=[AccountResponse.model_validate(account) for account in result.accounts],
        bad_transactions=[RejectedTransactionResponse.model_validate(item) for item in result.bad_transactions],
        accepted=result.accepted,
        rejected=result.rejected,
    )


@router.get("/accounts", response_model=List[AccountResponse], summary="List all accounts")
async def list_accounts(service: LedgerService = Depends(get_ledger_service)):
    try:
        accounts = await service.list_accounts()
    except LedgerStoreError as exc:
        logger.exception("Failed to list accounts")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch accounts") from exc
    return [AccountResponse.model_validate(account) for account in accounts]


@router.get("/accounts/{account_id}", response_model=AccountResponse, summary="Get one account")
async def get_account(account_id: str, service: LedgerService = Depends(get_ledger_service)):
    try:
        account = await service.get_account(account_id)
    except AccountNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Account not found") from exc
    return AccountResponse.model_validate(account)


@router.get(
    "/accounts/{account_id}/transactions",
    response_model=List[TransactionResponse],
    summary="List the transactions logged for an account",
)
async def list_account_transactions(account_id: str, service: LedgerService = Depends(get_ledger_service)):
    logger.info("Fetching transactions for account: %s", account_id)
    try:
        transactions = await service.list_transactions(account_id)
    except TransactionsNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No transactions found for account {account_id}",
        ) from exc
    return [TransactionResponse.model_validate(transaction) for transaction in transactions]


@router.get("/report", response_model=ReportResponse, summary="Accounts, rejected rows and collections")
async def get_report(service: LedgerService = Depends(get_ledger_service)) -> ReportResponse:
    try:
        report = await service.build_report()
    except LedgerStoreError as exc:
        logger.exception("Error fetching report data")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch report") from exc
    return ReportResponse(
        accounts=[AccountResponse.model_validate(account) for account in report.accounts],
        bad_transactions=[RejectedTransactionResponse.model_validate(item) for item in report.bad_transactions],
        collections=[AccountResponse.model_validate(account) for account in report.collections],
    )


@router.post("/reset", response_model=MessageResponse, summary="Clear all ledger data and staged uploads")
async def reset_ledger(
    service: LedgerService = Depends(get_ledger_service),
    storage: UploadStorage = Depends(get_upload_storage),
) -> MessageResponse:
    try:
        await service.reset()
        removed = storage.clear()
    except (LedgerStoreError, UploadStorageError) as exc:
        logger.exception("Error resetting the system")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="System reset failed.") from exc

    logger.info("System reset successful, %d staged uploads removed", removed)
    return MessageResponse(message="System reset successful.")
