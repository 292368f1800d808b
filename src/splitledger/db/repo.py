from __future__ import annotations

from typing import Any, Optional

import asyncpg

from splitledger.config import Settings, get_settings
from splitledger.errors import ConfigurationError
from splitledger.logging import get_logger, sql_logger
from splitledger.models import ExpenseRecord, Member, SettlementRecord, SettlementStatus, Share


class Database:
    def __init__(self, dsn: str) -> None:
        self._dsn = dsn
        self._pool: asyncpg.Pool | None = None
        self._log = get_logger(__name__)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "Database":
        settings = settings or get_settings()
        if not settings.database_url:
            raise ConfigurationError("DATABASE_URL is not set")
        return cls(settings.database_url)

    async def connect(self) -> None:
        if self._pool is None:
            # asyncpg expects a plain postgresql:// scheme
            dsn = self._dsn.replace("+asyncpg", "")
            self._pool = await asyncpg.create_pool(dsn)
            self._log.info("db.pool.created")

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            self._log.info("db.pool.closed")

    async def fetch(self, query: str, *args: Any) -> list[asyncpg.Record]:
        await self._ensure_pool()
        assert self._pool
        sql_logger.info("sql.fetch", query=query, args=args)
        return await self._pool.fetch(query, *args)

    async def _ensure_pool(self) -> None:
        if self._pool is None:
            await self.connect()


class LedgerRepository:
    """Read side of group storage, shaped for the ledger core.

    Rows are mapped straight onto the core value types; nothing is cached.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_members(self, group_id: str) -> list[Member]:
        rows = await self.db.fetch(
            """
            SELECT member_id, display_name
            FROM group_members
            WHERE group_id = $1
            ORDER BY joined_at, member_id
            """,
            group_id,
        )
        return [Member(id=row["member_id"], display_name=row["display_name"]) for row in rows]

    async def list_expenses(self, group_id: str) -> list[ExpenseRecord]:
        rows = await self.db.fetch(
            """
            SELECT e.id, e.payer_id, e.amount_cents,
                   array_agg(s.member_id ORDER BY s.member_id)
                       FILTER (WHERE s.member_id IS NOT NULL) AS share_members,
                   array_agg(s.share_cents ORDER BY s.member_id)
                       FILTER (WHERE s.member_id IS NOT NULL) AS share_cents
            FROM expenses e
            LEFT JOIN expense_splits s ON s.expense_id = e.id
            WHERE e.group_id = $1
            GROUP BY e.id
            ORDER BY e.id
            """,
            group_id,
        )
        expenses: list[ExpenseRecord] = []
        for row in rows:
            members = row["share_members"] or []
            cents = row["share_cents"] or []
            expenses.append(
                ExpenseRecord(
                    amount_cents=int(row["amount_cents"]),
                    payer=row["payer_id"],
                    shares=tuple(Share(participant=m, share_cents=int(c)) for m, c in zip(members, cents)),
                )
            )
        return expenses

    async def list_settlements(self, group_id: str) -> list[SettlementRecord]:
        rows = await self.db.fetch(
            """
            SELECT from_member_id, to_member_id, amount_cents, status
            FROM settlements
            WHERE group_id = $1
            ORDER BY created_at
            """,
            group_id,
        )
        return [
            SettlementRecord(
                from_participant=row["from_member_id"],
                to_participant=row["to_member_id"],
                amount_cents=int(row["amount_cents"]),
                status=SettlementStatus(str(row["status"]).lower()),
            )
            for row in rows
        ]
