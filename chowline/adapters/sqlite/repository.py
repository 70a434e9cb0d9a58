"""
SQLite Repository - Menu catalog storage with proximity queries.

Features:
- Async operations via aiosqlite
- Haversine distance registered as a SQL function
- Bounding-box pre-filter on indexed address coordinates
- Count and page queries sharing one filter builder
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import aiosqlite

from chowline.config.errors import ErrorCode, SearchError, StorageError
from chowline.domains.search.geo import SearchArea, great_circle_km
from chowline.domains.search.models import SearchCriteria
from chowline.domains.search.ranking import INSERTION_ORDER, SortKey

logger = logging.getLogger(__name__)

__all__ = ["SQLiteMenuRepository"]

# Sort keys -> SQL expressions; anything else is rejected
_SORT_COLUMNS: dict[str, str] = {
    "name": "mi.name COLLATE NOCASE",
    "price": "mi.price",
    "created_at": "mi.created_at",
    "distance": "distance",
    INSERTION_ORDER: "mi.rowid",
}

_ITEM_COLUMNS = """
    mi.*,
    v.business_name AS vendor_name,
    c.name AS category_name
"""

_ITEM_JOINS = """
    FROM menu_items mi
    JOIN vendors v ON v.id = mi.vendor_id
    LEFT JOIN categories c ON c.id = mi.category_id
    LEFT JOIN addresses a ON a.id = v.address_id
"""

SCHEMA = """
    -- Addresses (customer and vendor)
    CREATE TABLE IF NOT EXISTS addresses (
        id TEXT PRIMARY KEY,
        user_id TEXT,
        address_line_1 TEXT NOT NULL,
        city TEXT NOT NULL,
        state TEXT NOT NULL,
        country TEXT NOT NULL DEFAULT 'NG',
        latitude REAL CHECK (latitude BETWEEN -90 AND 90),
        longitude REAL CHECK (longitude BETWEEN -180 AND 180),
        created_at TEXT NOT NULL
    );

    CREATE TABLE IF NOT EXISTS vendors (
        id TEXT PRIMARY KEY,
        business_name TEXT NOT NULL,
        address_id TEXT REFERENCES addresses(id) ON DELETE SET NULL,
        is_active INTEGER NOT NULL DEFAULT 1,
        created_at TEXT NOT NULL
    );

    CREATE TABLE IF NOT EXISTS categories (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL UNIQUE,
        description TEXT,
        is_active INTEGER NOT NULL DEFAULT 1
    );

    CREATE TABLE IF NOT EXISTS menu_items (
        id TEXT PRIMARY KEY,
        vendor_id TEXT NOT NULL REFERENCES vendors(id) ON DELETE CASCADE,
        category_id TEXT NOT NULL REFERENCES categories(id) ON DELETE RESTRICT,
        name TEXT NOT NULL,
        description TEXT,
        price REAL NOT NULL CHECK (price >= 0),
        preparation_time_minutes INTEGER NOT NULL DEFAULT 15
            CHECK (preparation_time_minutes BETWEEN 1 AND 480),
        image_url TEXT,
        is_available INTEGER NOT NULL DEFAULT 1,
        created_at TEXT NOT NULL
    );

    -- Indexes
    CREATE INDEX IF NOT EXISTS idx_addresses_coordinates ON addresses(latitude, longitude);
    CREATE INDEX IF NOT EXISTS idx_menu_items_vendor ON menu_items(vendor_id, is_available);
    CREATE INDEX IF NOT EXISTS idx_menu_items_category ON menu_items(category_id, is_available);
    CREATE INDEX IF NOT EXISTS idx_menu_items_price ON menu_items(price);
"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLiteMenuRepository:
    """
    SQLite repository for the menu catalog.

    Example:
        >>> repo = SQLiteMenuRepository("data/chowline.db")
        >>> await repo.initialize()
        >>> address_id = await repo.insert_address("1 Marina", "Lagos", "Lagos", 6.45, 3.39)
        >>> vendor_id = await repo.insert_vendor("Mama Put", address_id=address_id)
    """

    def __init__(self, db_path: str | Path) -> None:
        """
        Initialize repository.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection: aiosqlite.Connection | None = None

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get or create database connection."""
        if self._connection is None:
            try:
                self._connection = await aiosqlite.connect(str(self.db_path))
            except aiosqlite.Error as e:
                raise StorageError(
                    f"Cannot open database: {e}",
                    details={"db_path": str(self.db_path)},
                ) from e
            self._connection.row_factory = aiosqlite.Row
            await self._connection.execute("PRAGMA foreign_keys = ON")
            await self._connection.create_function(
                "great_circle_km", 4, great_circle_km, deterministic=True
            )
        return self._connection

    async def initialize(self) -> None:
        """Initialize database schema."""
        conn = await self._get_connection()
        await conn.executescript(SCHEMA)
        await conn.commit()
        logger.info("Database initialized: %s", self.db_path)

    # --- Writes ---

    async def _insert(self, sql: str, params: tuple[Any, ...]) -> None:
        conn = await self._get_connection()
        try:
            await conn.execute(sql, params)
            await conn.commit()
        except aiosqlite.Error as e:
            raise StorageError(
                f"Write failed: {e}",
                code=ErrorCode.STORAGE_WRITE_FAILED,
            ) from e

    async def insert_address(
        self,
        address_line_1: str,
        city: str,
        state: str,
        latitude: float | None = None,
        longitude: float | None = None,
        country: str = "NG",
        user_id: str | None = None,
    ) -> str:
        """
        Insert an address.

        Returns:
            Address ID
        """
        address_id = str(uuid.uuid4())
        await self._insert(
            """
            INSERT INTO addresses
            (id, user_id, address_line_1, city, state, country, latitude, longitude, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (address_id, user_id, address_line_1, city, state, country, latitude, longitude, _now()),
        )
        return address_id

    async def insert_vendor(
        self,
        business_name: str,
        address_id: str | None = None,
        is_active: bool = True,
    ) -> str:
        """Insert a vendor and return its ID."""
        vendor_id = str(uuid.uuid4())
        await self._insert(
            "INSERT INTO vendors (id, business_name, address_id, is_active, created_at) "
            "VALUES (?, ?, ?, ?, ?)",
            (vendor_id, business_name, address_id, int(is_active), _now()),
        )
        return vendor_id

    async def insert_category(self, name: str, description: str | None = None) -> str:
        """Insert a category and return its ID."""
        category_id = str(uuid.uuid4())
        await self._insert(
            "INSERT INTO categories (id, name, description) VALUES (?, ?, ?)",
            (category_id, name, description),
        )
        return category_id

    async def insert_menu_item(
        self,
        vendor_id: str,
        category_id: str,
        name: str,
        price: float,
        description: str | None = None,
        preparation_time_minutes: int = 15,
        image_url: str | None = None,
        is_available: bool = True,
        created_at: datetime | None = None,
    ) -> str:
        """
        Insert a menu item.

        Returns:
            Menu item ID
        """
        item_id = str(uuid.uuid4())
        await self._insert(
            """
            INSERT INTO menu_items
            (id, vendor_id, category_id, name, description, price,
             preparation_time_minutes, image_url, is_available, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                item_id,
                vendor_id,
                category_id,
                name,
                description,
                round(price, 2),
                preparation_time_minutes,
                image_url,
                int(is_available),
                created_at.isoformat() if created_at else _now(),
            ),
        )
        return item_id

    async def toggle_menu_item_availability(self, item_id: str) -> bool:
        """Flip ``is_available``. Returns False if the item doesn't exist."""
        conn = await self._get_connection()
        try:
            cursor = await conn.execute(
                "UPDATE menu_items SET is_available = 1 - is_available WHERE id = ?",
                (item_id,),
            )
            await conn.commit()
        except aiosqlite.Error as e:
            raise StorageError(
                f"Write failed: {e}",
                code=ErrorCode.STORAGE_WRITE_FAILED,
            ) from e
        return cursor.rowcount > 0

    # --- Reads ---

    async def _fetchall(self, sql: str, params: list[Any] | tuple[Any, ...]) -> list[dict[str, Any]]:
        conn = await self._get_connection()
        try:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            raise StorageError(
                f"Read failed: {e}",
                code=ErrorCode.STORAGE_READ_FAILED,
            ) from e
        return [dict(row) for row in rows]

    async def get_address(self, address_id: str) -> dict[str, Any] | None:
        """Get address by ID."""
        rows = await self._fetchall("SELECT * FROM addresses WHERE id = ?", (address_id,))
        return rows[0] if rows else None

    async def get_category_by_name(self, name: str) -> dict[str, Any] | None:
        """Get category by (case-insensitive) name."""
        rows = await self._fetchall(
            "SELECT * FROM categories WHERE name = ? COLLATE NOCASE", (name,)
        )
        return rows[0] if rows else None

    async def get_menu_item(self, item_id: str) -> dict[str, Any] | None:
        """Get menu item by ID with vendor and category names."""
        rows = await self._fetchall(
            f"SELECT {_ITEM_COLUMNS} {_ITEM_JOINS} WHERE mi.id = ?",
            (item_id,),
        )
        return rows[0] if rows else None

    async def list_menu_items_by_vendor(self, vendor_id: str) -> list[dict[str, Any]]:
        """All items of a vendor, name ascending."""
        return await self._fetchall(
            f"SELECT {_ITEM_COLUMNS} {_ITEM_JOINS} "
            "WHERE mi.vendor_id = ? ORDER BY mi.name COLLATE NOCASE, mi.rowid",
            (vendor_id,),
        )

    async def list_available_by_category(self, category_id: str) -> list[dict[str, Any]]:
        """Available items in a category, name ascending."""
        return await self._fetchall(
            f"SELECT {_ITEM_COLUMNS} {_ITEM_JOINS} "
            "WHERE mi.category_id = ? AND mi.is_available = 1 "
            "ORDER BY mi.name COLLATE NOCASE, mi.rowid",
            (category_id,),
        )

    async def count_menu_items(
        self,
        criteria: SearchCriteria,
        area: SearchArea | None = None,
    ) -> int:
        """
        Count items matching the search filters.

        Selects no distance column and applies no ordering. The radius
        predicate follows the null and bounding-box predicates so the
        coordinate index does the coarse cut.
        """
        where, params = _build_filters(criteria, area)
        rows = await self._fetchall(
            f"SELECT COUNT(*) AS total {_ITEM_JOINS} WHERE {where}",
            params,
        )
        return rows[0]["total"] if rows else 0

    async def find_menu_items(
        self,
        criteria: SearchCriteria,
        area: SearchArea | None,
        sort_keys: list[SortKey],
        offset: int,
        limit: int,
    ) -> list[dict[str, Any]]:
        """
        Fetch one ordered page of matching items.

        Each row carries ``distance`` in km rounded to 2 decimals, or NULL
        when no area was given.
        """
        select_params: list[Any] = []
        if area is not None:
            distance_sql = "ROUND(great_circle_km(?, ?, a.latitude, a.longitude), 2)"
            select_params = [area.origin.latitude, area.origin.longitude]
        else:
            distance_sql = "NULL"

        where, where_params = _build_filters(criteria, area)
        order_by = _build_order_by(sort_keys)

        sql = (
            f"SELECT {_ITEM_COLUMNS}, {distance_sql} AS distance {_ITEM_JOINS} "
            f"WHERE {where} ORDER BY {order_by} LIMIT ? OFFSET ?"
        )
        return await self._fetchall(sql, [*select_params, *where_params, limit, offset])

    async def get_menu_item_count(self) -> int:
        """Get total menu item count."""
        rows = await self._fetchall("SELECT COUNT(*) AS total FROM menu_items", ())
        return rows[0]["total"] if rows else 0

    async def close(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None


def _build_filters(
    criteria: SearchCriteria,
    area: SearchArea | None,
) -> tuple[str, list[Any]]:
    """Build the WHERE clause shared by the count and page queries."""
    clauses: list[str] = []
    params: list[Any] = []

    # Customers see available items unless they ask otherwise
    clauses.append("mi.is_available = ?")
    params.append(1 if criteria.is_available in (None, True) else 0)

    if criteria.query:
        clauses.append(
            "(mi.name LIKE ? ESCAPE '\\' OR mi.description LIKE ? ESCAPE '\\')"
        )
        pattern = f"%{_escape_like(criteria.query)}%"
        params.extend([pattern, pattern])

    if criteria.category_id:
        clauses.append("mi.category_id = ?")
        params.append(criteria.category_id)

    if criteria.vendor_id:
        clauses.append("mi.vendor_id = ?")
        params.append(criteria.vendor_id)

    if criteria.min_price is not None:
        clauses.append("mi.price >= ?")
        params.append(criteria.min_price)

    if criteria.max_price is not None:
        clauses.append("mi.price <= ?")
        params.append(criteria.max_price)

    if area is not None:
        box = area.box
        # Vendors without coordinates can't be placed inside any radius
        clauses.append("a.latitude IS NOT NULL AND a.longitude IS NOT NULL")
        clauses.append("a.latitude BETWEEN ? AND ? AND a.longitude BETWEEN ? AND ?")
        params.extend(
            [box.min_latitude, box.max_latitude, box.min_longitude, box.max_longitude]
        )
        clauses.append("great_circle_km(?, ?, a.latitude, a.longitude) <= ?")
        params.extend([area.origin.latitude, area.origin.longitude, area.radius_km])

    return " AND ".join(clauses), params


def _build_order_by(sort_keys: list[SortKey]) -> str:
    """Translate sort keys into an ORDER BY list."""
    if not sort_keys:
        return _SORT_COLUMNS[INSERTION_ORDER]

    terms = []
    for key in sort_keys:
        column = _SORT_COLUMNS.get(key.field)
        if column is None:
            raise SearchError(
                f"Unsupported sort field: {key.field}",
                details={"sort_by": key.field},
            )
        terms.append(f"{column} {'DESC' if key.descending else 'ASC'}")
    return ", ".join(terms)
