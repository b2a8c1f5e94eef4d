"""Application service: Return Report use case (query)."""

from __future__ import annotations

from datetime import datetime

from kasir.application.dto import ReasonCountDTO, ReturnedProductDTO, ReturnReportDTO
from kasir.application.formatting import money
from kasir.domain.repository.return_repository import ReturnRepository
from kasir.domain.service.return_report import (
    filter_returns_by_date_range,
    process_return_report_data,
)


class ReturnReportHandler:

    def __init__(self, return_repo: ReturnRepository) -> None:
        self._return_repo = return_repo

    def handle(self, start: datetime, end: datetime) -> ReturnReportDTO:
        returns = filter_returns_by_date_range(self._return_repo.list_returns(), start, end)
        summary = process_return_report_data(returns)

        return ReturnReportDTO(
            total_returns=summary.total_returns,
            total_refund_amount=money(summary.total_refund_amount),
            by_reason=[
                ReasonCountDTO(reason=reason.value, count=count)
                for reason, count in summary.returns_by_reason.items()
            ],
            top_returned=[
                ReturnedProductDTO(
                    rank=rank,
                    product_name=p.product_name,
                    return_count=p.return_count,
                    total_quantity=p.total_quantity,
                )
                for rank, p in enumerate(summary.top_returned_products, start=1)
            ],
        )
