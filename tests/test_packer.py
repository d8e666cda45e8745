from __future__ import annotations

import math

import pytest

from pdf_nineup.packer import GridPacker, PackerState, compute_placement, page_count_for
from pdf_nineup.types import A4, GridCell

PAGE_W, PAGE_H = A4
CELL_W = PAGE_W / 3
CELL_H = PAGE_H / 3
PADDING = 6.0


def test_small_image_is_never_upscaled() -> None:
    rect = compute_placement(GridCell(0, 0), 100, 80)

    assert rect.width == 100
    assert rect.height == 80
    assert rect.x == pytest.approx((CELL_W - 100) / 2)
    assert rect.y == pytest.approx(PAGE_H - CELL_H + (CELL_H - 80) / 2)


@pytest.mark.parametrize("size", [(1400, 1812), (1400, 990), (600, 3000), (5000, 200)])
def test_large_image_fits_padded_cell_and_keeps_aspect(size) -> None:
    width, height = size
    rect = compute_placement(GridCell(1, 2), width, height)

    assert rect.width <= CELL_W - 2 * PADDING + 1e-9
    assert rect.height <= CELL_H - 2 * PADDING + 1e-9
    assert rect.width / rect.height == pytest.approx(width / height)
    # One axis touches the padded bound.
    assert math.isclose(rect.width, CELL_W - 2 * PADDING) or math.isclose(
        rect.height, CELL_H - 2 * PADDING
    )


def test_image_is_centred_in_its_cell() -> None:
    rect = compute_placement(GridCell(2, 1), 1400, 1812)

    centre_x = rect.x + rect.width / 2
    centre_y = rect.y + rect.height / 2
    assert centre_x == pytest.approx(1.5 * CELL_W)
    assert centre_y == pytest.approx(0.5 * CELL_H)


def test_row_zero_is_the_top_row() -> None:
    top = compute_placement(GridCell(0, 0), 50, 50)
    bottom = compute_placement(GridCell(2, 0), 50, 50)

    assert top.y > bottom.y
    assert top.y == pytest.approx(2 * CELL_H + (CELL_H - 50) / 2)
    assert bottom.y == pytest.approx((CELL_H - 50) / 2)


def test_placement_honours_custom_page_and_padding() -> None:
    rect = compute_placement(GridCell(0, 0), 1000, 1000, page_width=300, page_height=300, padding=10)

    assert rect.width == pytest.approx(80)
    assert rect.height == pytest.approx(80)
    assert rect.x == pytest.approx(10)
    assert rect.y == pytest.approx(210)


@pytest.mark.parametrize("index", range(20))
def test_cells_fill_row_major(index: int) -> None:
    cell = GridCell.from_index(index)
    assert cell.row == (index % 9) // 3
    assert cell.column == (index % 9) % 3


def test_grid_cell_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        GridCell(3, 0)


@pytest.mark.parametrize(
    "count, expected",
    [(0, 0), (1, 1), (8, 1), (9, 1), (10, 2), (18, 2), (19, 3), (81, 9)],
)
def test_page_count_for(count: int, expected: int) -> None:
    assert page_count_for(count) == expected


@pytest.mark.parametrize("count", [1, 8, 9, 10, 17, 18, 19, 27])
def test_packer_creates_ceil_n_over_nine_pages(count, raster_factory, recording_encoder) -> None:
    packer = GridPacker(recording_encoder)
    placements = packer.pack([raster_factory(i) for i in range(count)])

    assert recording_encoder.page_count == math.ceil(count / 9)
    assert len(placements) == count
    assert len(recording_encoder.draws) == count
    assert packer.state is PackerState.DONE


def test_empty_sequence_produces_no_pages(recording_encoder) -> None:
    packer = GridPacker(recording_encoder)

    assert packer.pack([]) == []
    assert recording_encoder.pages == []
    assert recording_encoder.images == []
    assert packer.state is PackerState.DONE


def test_exactly_nine_images_fill_one_page(raster_factory, recording_encoder) -> None:
    placements = GridPacker(recording_encoder).pack([raster_factory(i) for i in range(9)])

    assert recording_encoder.page_count == 1
    assert {p.page_number for p in placements} == {1}
    assert placements[-1].cell == GridCell(2, 2)


def test_tenth_image_starts_second_page_top_left(raster_factory, recording_encoder) -> None:
    placements = GridPacker(recording_encoder).pack([raster_factory(i) for i in range(10)])

    assert recording_encoder.page_count == 2
    second_page = [p for p in placements if p.page_number == 2]
    assert len(second_page) == 1
    assert second_page[0].cell == GridCell(0, 0)
    assert second_page[0].source_index == 9


def test_images_are_consumed_in_order(raster_factory, recording_encoder) -> None:
    placements = GridPacker(recording_encoder).pack([raster_factory(i) for i in range(14)])

    assert [p.source_index for p in placements] == list(range(14))
    for k, placement in enumerate(placements):
        assert placement.page_number == k // 9 + 1
        assert placement.cell == GridCell((k % 9) // 3, (k % 9) % 3)


def test_draw_rect_matches_placement(raster_factory, recording_encoder) -> None:
    placements = GridPacker(recording_encoder).pack([raster_factory(0, 1400, 1812)])

    page_number, handle, rect = recording_encoder.draws[0]
    assert page_number == 1
    assert (handle.width, handle.height) == (1400, 1812)
    assert rect == placements[0].rect
    assert rect == compute_placement(GridCell(0, 0), 1400, 1812)


def test_every_draw_lands_on_a_page_opened_while_filling(raster_factory, make_encoder) -> None:
    seen = []

    class StateRecordingEncoder(make_encoder):
        def draw_image(self, page, image, rect) -> None:
            seen.append((page.number, packer.state))
            super().draw_image(page, image, rect)

    encoder = StateRecordingEncoder()
    packer = GridPacker(encoder)
    packer.pack([raster_factory(i) for i in range(19)])

    assert [number for number, _ in seen] == [k // 9 + 1 for k in range(19)]
    assert {state for _, state in seen} == {PackerState.FILLING}
    assert encoder.page_count == 3
