import asyncio

import pytest

from catalog.models import Record
from tests.mocks import MockCollection
from ui.controller import PageState
from ui.table import TableSession
from utils.errors import BulkSelectionCancelled, FetchError, NavigationLocked, PageOutOfRange, ValidationError

pytestmark = pytest.mark.asyncio


@pytest.fixture
def views():
    return []


@pytest.fixture
def session(collection, views):
    return TableSession(collection, on_render=views.append)


async def test_start_renders_first_page(collection, session, views):
    await session.start()
    view = session.render()

    assert view.state is PageState.LOADED
    assert [row.id for row in view.rows] == [r.id for r in collection.page_records(1)]
    assert view.first == 0
    assert view.rows_per_page == 12
    assert view.total_records == 100
    assert view.total_pages == 9
    assert view.current_page == 1
    assert view.banner is None
    assert not view.loading
    # one frame while loading, one when loaded
    assert [v.state for v in views] == [PageState.LOADING, PageState.LOADED]
    assert views[0].loading


async def test_cells_use_missing_sentinel(session):
    await session.start()
    row = session.render().rows[0]
    assert row.cells["Title"] == "Artwork 1"
    assert row.cells["Place of Origin"] == "N/A"
    assert list(row.cells) == session.render().headers


async def test_selection_survives_navigation(collection, session):
    await session.start()
    page_one = collection.page_records(1)
    session.change_selection([page_one[0], page_one[4]])

    await session.change_page(2)
    view = session.render()
    assert view.checked_ids == frozenset()
    assert view.selected_count == 2
    assert view.first == 12

    session.change_selection([collection.page_records(2)[1].id])
    await session.change_page(1)
    view = session.render()
    assert view.checked_ids == {page_one[0].id, page_one[4].id}
    assert [row.checked for row in view.rows][:5] == [True, False, False, False, True]
    assert view.banner == "3 rows selected"


async def test_unchecking_rows(collection, session):
    await session.start()
    page_one = collection.page_records(1)
    session.change_selection(page_one)
    session.change_selection(page_one[1:])
    assert session.render().selected_count == 11
    assert page_one[0].id not in session.store


async def test_select_rows_from_text(collection, session):
    await session.start()
    assert await session.select_rows("15") == 15

    view = session.render()
    assert view.banner == "15 rows selected"
    assert view.checked_ids == {r.id for r in collection.page_records(1)}
    # bulk selection does not move the displayed page
    assert view.current_page == 1
    assert not view.navigation_locked


async def test_select_rows_invalid(collection, session):
    await session.start()
    for count in ("", "abc", "0", "-3", 0):
        with pytest.raises(ValidationError):
            await session.select_rows(count)
    assert session.render().selected_count == 0
    assert collection.requests == [1]


async def test_bulk_selection_then_page_two(collection, session):
    await session.start()
    await session.select_rows(15)
    await session.change_page(2)

    view = session.render()
    assert [row.checked for row in view.rows] == [True] * 3 + [False] * 9


async def test_navigation_locked_during_bulk_selection(collection, session, views):
    await session.start()
    collection.hold(2)

    bulk = asyncio.create_task(session.select_rows(20))
    await collection.requested(2)
    assert session.render().navigation_locked
    assert views[-1].navigation_locked

    with pytest.raises(NavigationLocked):
        await session.change_page(3)

    collection.release(2)
    assert await bulk == 20
    assert not session.render().navigation_locked
    assert session.render().current_page == 1


async def test_new_bulk_selection_cancels_running_one(collection, session):
    await session.start()
    collection.hold(2)

    first = asyncio.create_task(session.select_rows(50))
    await collection.requested(2)
    second = asyncio.create_task(session.select_rows(5))

    # the second walk fetches page 1 while the first is still waiting on page 2
    await asyncio.sleep(0)
    collection.release(2)

    with pytest.raises(BulkSelectionCancelled) as e:
        await first
    assert e.value.selected == 12
    assert await second == 5
    assert session.store.size() == 12
    assert not session.navigation_locked


async def test_cancel_bulk_selection(collection, session):
    await session.start()
    collection.hold(3)

    bulk = asyncio.create_task(session.select_rows(100))
    await collection.requested(3)
    session.cancel_bulk_selection()
    collection.release(3)

    with pytest.raises(BulkSelectionCancelled):
        await bulk
    assert session.store.size() == 24


async def test_bulk_failure_is_reported_with_progress():
    session = TableSession(MockCollection(fail_pages={2}))
    await session.start()
    with pytest.raises(FetchError) as e:
        await session.select_rows(30)
    assert e.value.page == 2
    assert e.value.selected == 12
    assert session.render().banner == "12 rows selected"


async def test_page_error_is_rendered():
    collection = MockCollection(fail_pages={4})
    session = TableSession(collection)
    await session.start()
    await session.change_page(4)

    view = session.render()
    assert view.state is PageState.ERROR
    assert view.rows == ()
    assert view.error == "Could not load page 4: page 4 is broken"
    assert not view.loading


async def test_out_of_range_page(session):
    await session.start()
    with pytest.raises(PageOutOfRange):
        await session.change_page(42)


async def test_clear_selection(session):
    await session.start()
    await session.select_rows(3)
    session.clear_selection()
    assert session.render().banner is None


async def test_render_callback_errors_are_contained(collection):
    def broken(view):
        raise RuntimeError("renderer broke")

    session = TableSession(collection, on_render=broken)
    await session.start()
    session.change_selection([Record(id=collection.records[0].id)])
    assert session.store.size() == 1
