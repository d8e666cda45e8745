"""Pack raster images onto output pages in a 3x3 grid."""

from __future__ import annotations

import math
from collections import deque
from enum import Enum
from typing import Iterable, List

from .backends.base import DocumentEncoder, PageHandle
from .embedder import EmbedTier, ImageEmbedder
from .types import (
    A4,
    CELLS_PER_PAGE,
    GRID_COLUMNS,
    GRID_ROWS,
    GridCell,
    PageSize,
    Placement,
    PlacementRect,
    RasterImage,
)
from .utils import get_logger

LOGGER = get_logger("pdf_nineup.packer")

DEFAULT_PADDING = 6.0


class PackerState(str, Enum):
    NEED_NEW_PAGE = "need_new_page"
    FILLING = "filling"
    DONE = "done"


def page_count_for(image_count: int) -> int:
    """Number of output pages needed for ``image_count`` images."""

    return math.ceil(image_count / CELLS_PER_PAGE)


def compute_placement(
    cell: GridCell,
    image_width: float,
    image_height: float,
    *,
    page_width: float = A4[0],
    page_height: float = A4[1],
    padding: float = DEFAULT_PADDING,
) -> PlacementRect:
    """Fit an image into ``cell``, centred, never upscaled, aspect ratio kept.

    The image is scaled uniformly so that it fits the cell minus ``padding``
    on every side. Images already smaller than that are drawn at scale 1.0.
    Coordinates use the PDF convention: origin bottom-left, row 0 on top.
    """

    cell_width = page_width / GRID_COLUMNS
    cell_height = page_height / GRID_ROWS
    scale = min(
        (cell_width - padding * 2) / image_width,
        (cell_height - padding * 2) / image_height,
        1.0,
    )
    draw_width = image_width * scale
    draw_height = image_height * scale
    x = cell.column * cell_width + (cell_width - draw_width) / 2
    y = page_height - (cell.row + 1) * cell_height + (cell_height - draw_height) / 2
    return PlacementRect(x=x, y=y, width=draw_width, height=draw_height)


class GridPacker:
    """Drives the page/cell state machine over an ordered image sequence.

    Images are consumed strictly in order. A new page is started when none
    exists yet or the current one holds nine images and more remain, so the
    output never ends with an empty page.
    """

    def __init__(
        self,
        encoder: DocumentEncoder,
        embedder: ImageEmbedder | None = None,
        *,
        page_size: PageSize = A4,
        padding: float = DEFAULT_PADDING,
    ) -> None:
        self.encoder = encoder
        self.embedder = embedder or ImageEmbedder()
        self.page_size = page_size
        self.padding = padding
        self.state = PackerState.DONE

    def pack(self, images: Iterable[RasterImage]) -> List[Placement]:
        pending = deque(images)
        placements: List[Placement] = []
        self.state = PackerState.NEED_NEW_PAGE if pending else PackerState.DONE

        while self.state is PackerState.NEED_NEW_PAGE:
            page = self.encoder.add_page(self.page_size)
            self.state = PackerState.FILLING
            for slot in range(CELLS_PER_PAGE):
                placements.append(self._place(page, slot, pending.popleft()))
                if not pending:
                    break
            self.state = PackerState.NEED_NEW_PAGE if pending else PackerState.DONE

        return placements

    def _place(self, page: PageHandle, slot: int, image: RasterImage) -> Placement:
        cell = GridCell.from_index(slot)
        outcome = self.embedder.embed_with_outcome(self.encoder, image)
        rect = compute_placement(
            cell,
            outcome.handle.width,
            outcome.handle.height,
            page_width=page.width,
            page_height=page.height,
            padding=self.padding,
        )
        self.encoder.draw_image(page, outcome.handle, rect)
        LOGGER.debug(
            "Placed page %s on sheet %s at row %s, column %s: %s",
            image.page_index + 1,
            page.number,
            cell.row,
            cell.column,
            rect,
        )
        return Placement(
            page_number=page.number,
            cell=cell,
            rect=rect,
            source_index=image.page_index,
            placeholder=outcome.tier is EmbedTier.PLACEHOLDER,
        )
