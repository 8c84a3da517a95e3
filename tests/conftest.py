"""Shared schema fixtures for layout tests."""

import pytest

from erd_layout import Column, Relation, Schema, Table


def make_table(table_id: str, *column_names: str) -> Table:
    """Build a table with an `id` primary key plus the given columns."""
    columns = [Column(id=f"{table_id}.id", name="id", type="integer", is_primary_key=True)]
    for name in column_names:
        columns.append(Column(
            id=f"{table_id}.{name}",
            name=name,
            type="integer",
            is_foreign_key=name.endswith("_id"),
        ))
    return Table(id=table_id, name=table_id, columns=columns)


def make_relation(source: str, target: str, column: str | None = None) -> Relation:
    """Build `source.<target>_id -> target.id`."""
    column = column or f"{target}_id"
    return Relation(
        id=f"{source}_{column}_fkey",
        source_table=source,
        source_column=column,
        target_table=target,
        target_column="id",
    )


@pytest.fixture
def empty_schema() -> Schema:
    return Schema(tables=[], relations=[])


@pytest.fixture
def blog_schema() -> Schema:
    """users <- posts <- comments"""
    return Schema(
        tables=[
            make_table("users", "email"),
            make_table("posts", "users_id", "title"),
            make_table("comments", "posts_id", "body"),
        ],
        relations=[
            make_relation("posts", "users"),
            make_relation("comments", "posts"),
        ],
    )


@pytest.fixture
def cycle_schema() -> Schema:
    """a -> b -> a"""
    return Schema(
        tables=[make_table("a", "b_id"), make_table("b", "a_id")],
        relations=[make_relation("a", "b"), make_relation("b", "a")],
    )


@pytest.fixture
def star_schema() -> Schema:
    """b, c, d all reference a."""
    return Schema(
        tables=[make_table("a"), make_table("b"), make_table("c"), make_table("d")],
        relations=[
            make_relation("b", "a"),
            make_relation("c", "a"),
            make_relation("d", "a"),
        ],
    )


@pytest.fixture
def shop_schema() -> Schema:
    """A mid-sized schema with a self-reference and a dangling relation."""
    return Schema(
        tables=[
            make_table("customers"),
            make_table("categories", "categories_id"),
            make_table("products", "categories_id"),
            make_table("orders", "customers_id"),
            make_table("order_items", "orders_id", "products_id"),
            make_table("reviews", "products_id", "customers_id"),
            make_table("audit_log"),
        ],
        relations=[
            make_relation("categories", "categories", "parent_id"),
            make_relation("products", "categories"),
            make_relation("orders", "customers"),
            make_relation("order_items", "orders"),
            make_relation("order_items", "products"),
            make_relation("reviews", "products"),
            make_relation("reviews", "customers"),
            make_relation("audit_log", "staff"),
        ],
    )
