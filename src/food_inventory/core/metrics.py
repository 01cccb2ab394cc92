from prometheus_client import Counter

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)

PRODUCT_SEARCHES = Counter(
    "product_searches_total",
    "Total number of product searches by outcome (hit, empty, not_found)",
    ["outcome"],
)

PRODUCT_DELETIONS = Counter(
    "product_deletions_total",
    "Total number of deleted products including their holdings",
)
