"""Read every row a Protean query matches.

Protean caps queries at 100 rows unless told otherwise, so list reads page
through the result with offset/limit until a short page comes back.
"""

PAGE_SIZE = 100


def fetch_all(query, page_size: int = PAGE_SIZE) -> list:
    items = []
    offset = 0
    while True:
        page = query.offset(offset).limit(page_size).all()
        items.extend(page.items)
        if len(page.items) < page_size:
            return items
        offset += page_size
