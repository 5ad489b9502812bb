import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError

from lightbnb.schemas.records import NewProperty, NewUser, PropertySearchOptions
from lightbnb.schemas.results import ErrorKind, QueryFailed
from lightbnb.services import (
    add_property,
    add_user,
    get_all_properties,
    get_all_reservations,
    get_user_with_email,
    get_user_with_id,
)

USER_ROW = {"id": 1, "name": "Devin Sanders", "email": "tristanjacobs@gmail.com", "password": "$2a$10$FB/BOAVhpuLvpOREQVmvmezD4ED/.JBIDRh70tGevYzYzQgFId2u."}


def compiled(stmt):
    return stmt.compile(dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}).string


@pytest.mark.asyncio
async def test_get_user_with_email_returns_record(fake_db):
    db = fake_db(rows=[USER_ROW])
    result = await get_user_with_email(db, "tristanjacobs@gmail.com")
    assert result.ok
    assert result.value.id == 1
    sql = compiled(db.conn.execute.call_args.args[0])
    assert "FROM users" in sql
    assert "users.email = 'tristanjacobs@gmail.com'" in sql


@pytest.mark.asyncio
async def test_missing_user_is_success_with_none(fake_db):
    result = await get_user_with_id(fake_db(rows=[]), 99)
    assert result.ok
    assert result.value is None


@pytest.mark.asyncio
async def test_get_user_with_id_reports_connection_failure(fake_db):
    error = OperationalError("SELECT", {}, ConnectionRefusedError("refused"))
    result = await get_user_with_id(fake_db(error=error), 1)
    assert not result.ok
    assert result.error.kind is ErrorKind.CONNECTION
    with pytest.raises(QueryFailed):
        result.unwrap()


@pytest.mark.asyncio
async def test_add_user_inserts_in_transaction(fake_db):
    db = fake_db(rows=[USER_ROW])
    user = NewUser(name="Devin Sanders", email="tristanjacobs@gmail.com", password="secret")
    result = await add_user(db, user)
    assert result.unwrap().email == "tristanjacobs@gmail.com"
    assert db.begun == 1
    sql = compiled(db.conn.execute.call_args.args[0])
    assert sql.startswith("INSERT INTO users")
    assert "RETURNING" in sql


@pytest.mark.asyncio
async def test_duplicate_email_is_integrity_failure(fake_db):
    error = IntegrityError("INSERT", {}, Exception("duplicate key value violates unique constraint"))
    user = NewUser(name="a", email="a@b.c", password="p")
    result = await add_user(fake_db(error=error), user)
    assert result.error.kind is ErrorKind.INTEGRITY
    assert "duplicate key" in result.error.message


@pytest.mark.asyncio
async def test_get_all_reservations_shapes_rows(fake_db, reservation_row):
    db = fake_db(rows=[reservation_row])
    result = await get_all_reservations(db, guest_id=1, limit=5)
    reservation = result.unwrap()[0]
    assert reservation.id == 41
    assert reservation.property_id == 7
    assert reservation.average_rating == pytest.approx(4.2)
    sql = compiled(db.conn.execute.call_args.args[0])
    assert "reservations.guest_id = 1" in sql
    assert "reservations.end_date < CURRENT_DATE" in sql
    assert "GROUP BY properties.id, reservations.id" in sql
    assert "ORDER BY reservations.start_date" in sql
    assert "LIMIT 5" in sql


@pytest.mark.asyncio
async def test_get_all_reservations_query_failure(fake_db):
    error = ProgrammingError("SELECT", {}, Exception("column does not exist"))
    result = await get_all_reservations(fake_db(error=error), guest_id=1)
    assert result.error.kind is ErrorKind.QUERY
    assert result.value is None


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [0, -3, True, 2.5])
async def test_get_all_reservations_rejects_bad_limit(fake_db, limit):
    db = fake_db()
    with pytest.raises(ValueError):
        await get_all_reservations(db, guest_id=1, limit=limit)
    db.conn.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_all_properties_sends_built_statement(fake_db, property_row):
    db = fake_db(rows=[{**property_row, "average_rating": None}])
    options = PropertySearchOptions(city="Sotb", minimum_price_per_night=50, maximum_price_per_night=150)
    result = await get_all_properties(db, options, limit=2)
    assert result.ok
    assert result.value[0].average_rating is None
    sql, params = db.conn.exec_driver_sql.call_args.args
    assert "city LIKE $1" in sql
    assert params == ("%Sotb%", 5000, 15000, 2)


@pytest.mark.asyncio
async def test_get_all_properties_defaults_to_no_filters(fake_db):
    db = fake_db(rows=[])
    result = await get_all_properties(db)
    assert result.ok
    assert result.value == []
    sql, params = db.conn.exec_driver_sql.call_args.args
    assert params == (10,)
    assert "HAVING" not in sql


@pytest.mark.asyncio
async def test_failed_search_is_distinguishable_from_empty(fake_db):
    empty = await get_all_properties(fake_db(rows=[]), PropertySearchOptions(city="Nowhere"))
    failed = await get_all_properties(fake_db(error=OSError("network unreachable")), PropertySearchOptions(city="Nowhere"))
    assert empty.ok and empty.value == []
    assert not failed.ok
    assert failed.error.kind is ErrorKind.CONNECTION


@pytest.mark.asyncio
async def test_add_property_returns_record_without_rating(fake_db, property_row):
    db = fake_db(rows=[property_row])
    prop = NewProperty(**{k: v for k, v in property_row.items() if k != "id"})
    result = await add_property(db, prop)
    record = result.unwrap()
    assert record.id == 7
    assert record.cost_per_night == 9300
    assert record.average_rating is None
    sql = compiled(db.conn.execute.call_args.args[0])
    assert sql.startswith("INSERT INTO properties")
    assert "9300" in sql


@pytest.mark.asyncio
async def test_unexpected_errors_propagate(fake_db, property_row):
    prop = NewProperty(**{k: v for k, v in property_row.items() if k != "id"})
    with pytest.raises(KeyError):
        await add_property(fake_db(error=KeyError("boom")), prop)


@pytest.mark.asyncio
async def test_failed_insert_keeps_password_out_of_message_and_logs(fake_db, capsys):
    error = IntegrityError(
        "INSERT INTO users (name, email, password) VALUES ($1, $2, $3)",
        ("a", "a@b.c", "s3cretpw"),
        Exception("duplicate key value violates unique constraint \"users_email_key\""),
    )
    assert "s3cretpw" in str(error)
    user = NewUser(name="a", email="a@b.c", password="s3cretpw")
    result = await add_user(fake_db(error=error), user)
    assert result.error.kind is ErrorKind.INTEGRITY
    assert "users_email_key" in result.error.message
    assert "s3cretpw" not in result.error.message
    captured = capsys.readouterr()
    assert "s3cretpw" not in captured.out + captured.err


@pytest.mark.asyncio
async def test_legacy_rows_read_without_new_listing_rules(fake_db, property_row):
    legacy = {**property_row, "title": "", "cost_per_night": -100, "average_rating": None}
    result = await get_all_properties(fake_db(rows=[legacy]))
    record = result.unwrap()[0]
    assert record.title == ""
    assert record.cost_per_night == -100
