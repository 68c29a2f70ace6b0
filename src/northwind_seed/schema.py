"""Northwind table definitions shared by generators, writer and migrations."""

from northwind_seed.models import ColumnInfo, ForeignKeyInfo, IndexInfo, TableInfo

CUSTOMERS = "customers"
EMPLOYEES = "employees"
ORDERS = "orders"
SUPPLIERS = "suppliers"
PRODUCTS = "products"
ORDER_DETAILS = "order_details"
SHIPPERS = "shippers"


def _pk() -> ColumnInfo:
    return ColumnInfo(name="id", sql_type="INTEGER", is_primary_key=True)


def _text(name: str, nullable: bool = False) -> ColumnInfo:
    return ColumnInfo(name=name, sql_type="TEXT", is_nullable=nullable)


def _int(name: str, nullable: bool = False) -> ColumnInfo:
    return ColumnInfo(name=name, sql_type="INTEGER", is_nullable=nullable)


def _money(name: str) -> ColumnInfo:
    return ColumnInfo(name=name, sql_type="NUMERIC(10, 2)")


TABLES: dict[str, TableInfo] = {
    CUSTOMERS: TableInfo(
        name=CUSTOMERS,
        columns=[
            _pk(),
            _text("company_name"),
            _text("contact_name"),
            _text("contact_title"),
            _text("address"),
            _text("city"),
            _text("postal_code", nullable=True),
            _text("region", nullable=True),
            _text("country"),
            _text("phone"),
            _text("fax", nullable=True),
        ],
    ),
    EMPLOYEES: TableInfo(
        name=EMPLOYEES,
        columns=[
            _pk(),
            _text("last_name"),
            _text("first_name", nullable=True),
            _text("title"),
            _text("title_of_courtesy"),
            _text("address"),
            _text("city"),
            _text("postal_code"),
            _text("country"),
            _text("home_phone"),
            _int("extension"),
            _text("notes"),
            _int("recipient_id", nullable=True),
        ],
        foreign_keys=[
            ForeignKeyInfo(
                column="recipient_id",
                referenced_table=EMPLOYEES,
                is_self_referencing=True,
            ),
        ],
        indexes=[IndexInfo(name="recepient_idx", column="recipient_id")],
    ),
    ORDERS: TableInfo(
        name=ORDERS,
        columns=[
            _pk(),
            _text("order_date"),
            _text("required_date"),
            _text("shipped_date", nullable=True),
            _int("ship_via"),
            _money("freight"),
            _text("ship_name"),
            _text("ship_city"),
            _text("ship_region", nullable=True),
            _text("ship_postal_code", nullable=True),
            _text("ship_country"),
            _int("customer_id"),
            _int("employee_id"),
        ],
        foreign_keys=[
            ForeignKeyInfo(column="customer_id", referenced_table=CUSTOMERS),
            ForeignKeyInfo(column="employee_id", referenced_table=EMPLOYEES),
        ],
    ),
    SUPPLIERS: TableInfo(
        name=SUPPLIERS,
        columns=[
            _pk(),
            _text("company_name"),
            _text("contact_name"),
            _text("contact_title"),
            _text("address"),
            _text("city"),
            _text("region", nullable=True),
            _text("postal_code"),
            _text("country"),
            _text("phone"),
        ],
    ),
    PRODUCTS: TableInfo(
        name=PRODUCTS,
        columns=[
            _pk(),
            _text("name"),
            _text("qt_per_unit"),
            _money("unit_price"),
            _int("units_in_stock"),
            _int("units_on_order"),
            _int("reorder_level"),
            _int("discontinued"),
            _int("supplier_id"),
        ],
        foreign_keys=[
            ForeignKeyInfo(column="supplier_id", referenced_table=SUPPLIERS),
        ],
        indexes=[IndexInfo(name="supplier_idx", column="supplier_id")],
    ),
    ORDER_DETAILS: TableInfo(
        name=ORDER_DETAILS,
        columns=[
            _money("unit_price"),
            _int("quantity"),
            ColumnInfo(name="discount", sql_type="REAL"),
            _int("order_id"),
            _int("product_id"),
        ],
        foreign_keys=[
            ForeignKeyInfo(column="order_id", referenced_table=ORDERS),
            ForeignKeyInfo(column="product_id", referenced_table=PRODUCTS),
        ],
        indexes=[
            IndexInfo(name="order_id_idx", column="order_id"),
            IndexInfo(name="product_id_idx", column="product_id"),
        ],
    ),
    SHIPPERS: TableInfo(
        name=SHIPPERS,
        columns=[
            _pk(),
            _text("company_name", nullable=True),
            _text("phone", nullable=True),
        ],
        indexes=[IndexInfo(name="company_name_idx", column="company_name")],
    ),
}


def get_table_info(table: str) -> TableInfo:
    """
    Look up a table definition.

    Raises:
        KeyError: If the table is not part of the Northwind schema
    """
    try:
        return TABLES[table]
    except KeyError:
        raise KeyError(
            f"Unknown table '{table}'. Available: {', '.join(TABLES)}"
        ) from None
