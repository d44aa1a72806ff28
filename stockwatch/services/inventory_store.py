"""
Read-only access to tenants, products and suppliers.

The notification core never writes inventory data. Rows are validated into
typed records here; a malformed row is logged and skipped rather than
failing the whole read.
"""

import logging
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from stockwatch.core.exceptions import StoreUnavailableError
from stockwatch.models.product import Product
from stockwatch.models.supplier import Supplier
from stockwatch.models.tenant import Tenant
from stockwatch.schemas.inventory import ProductSnapshot, SupplierRecord

logger = logging.getLogger(__name__)


class InventoryStore:
    """Interface the trigger adapters read through."""

    async def list_tenant_ids(self) -> List[str]:
        raise NotImplementedError

    async def tenant_exists(self, tenant_id: str) -> bool:
        raise NotImplementedError

    async def get_product(self, tenant_id: str, product_id: str) -> Optional[ProductSnapshot]:
        raise NotImplementedError

    async def list_products(self, tenant_id: str, max_quantity=None) -> List[ProductSnapshot]:
        raise NotImplementedError

    async def list_suppliers(self, tenant_id: str, auto_email_only: bool = False) -> List[SupplierRecord]:
        raise NotImplementedError


def _product_from_row(row: Product) -> Optional[ProductSnapshot]:
    try:
        return ProductSnapshot.from_orm_model(row)
    except ValidationError as exc:
        logger.warning("Skipping malformed product %s/%s: %s", row.tenant_id, row.id, exc)
        return None


def _supplier_from_row(row: Supplier) -> Optional[SupplierRecord]:
    try:
        return SupplierRecord.from_orm_model(row)
    except ValidationError as exc:
        logger.warning("Skipping malformed supplier %s/%s: %s", row.tenant_id, row.id, exc)
        return None


class SQLAlchemyInventoryStore(InventoryStore):
    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    async def list_tenant_ids(self) -> List[str]:
        stmt = select(Tenant.id).order_by(Tenant.id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [row[0] for row in result]
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Could not list tenants: {exc}") from exc

    async def tenant_exists(self, tenant_id: str) -> bool:
        stmt = select(Tenant.id).where(Tenant.id == tenant_id)
        try:
            async with self._session_factory() as session:
                return (await session.scalar(stmt)) is not None
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Could not read tenant {tenant_id}: {exc}") from exc

    async def get_product(self, tenant_id: str, product_id: str) -> Optional[ProductSnapshot]:
        stmt = select(Product).where(Product.tenant_id == tenant_id, Product.id == product_id)
        try:
            async with self._session_factory() as session:
                row = await session.scalar(stmt)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Could not read product {tenant_id}/{product_id}: {exc}") from exc
        if row is None:
            return None
        return _product_from_row(row)

    async def list_products(self, tenant_id: str, max_quantity=None) -> List[ProductSnapshot]:
        stmt = select(Product).where(Product.tenant_id == tenant_id)
        if max_quantity is not None:
            stmt = stmt.where(Product.quantity <= max_quantity)
        stmt = stmt.order_by(Product.id)
        try:
            async with self._session_factory() as session:
                rows = (await session.scalars(stmt)).all()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Could not list products of tenant {tenant_id}: {exc}") from exc
        return [product for product in map(_product_from_row, rows) if product is not None]

    async def list_suppliers(self, tenant_id: str, auto_email_only: bool = False) -> List[SupplierRecord]:
        stmt = select(Supplier).where(Supplier.tenant_id == tenant_id)
        if auto_email_only:
            stmt = stmt.where(Supplier.auto_email.is_(True))
        stmt = stmt.order_by(Supplier.id)
        try:
            async with self._session_factory() as session:
                rows = (await session.scalars(stmt)).all()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Could not list suppliers of tenant {tenant_id}: {exc}") from exc
        return [supplier for supplier in map(_supplier_from_row, rows) if supplier is not None]
