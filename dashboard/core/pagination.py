"""Pagination — page math for the invoices listing."""

import math


def clamp_page(page: int) -> int:
    return max(page, 1)


def page_offset(page: int, per_page: int) -> int:
    return (clamp_page(page) - 1) * per_page


def total_pages(count: int, per_page: int) -> int:
    if per_page <= 0:
        raise ValueError("per_page must be positive")
    return math.ceil(count / per_page)
