from prometheus_client import Counter, Histogram


# Search Metrics
global_searches_total = Counter("forme_global_searches_total", "Global search requests", ["outcome"])
global_search_duration = Histogram("forme_global_search_seconds", "Global search latency")
global_search_results = Histogram(
    "forme_global_search_results",
    "Number of results returned per global search",
    buckets=[0, 1, 5, 10, 20, 35, float("inf")],
)

# Shop creation metrics
shop_batch_products_total = Counter(
    "forme_shop_batch_products_total", "Products submitted with a new shop", ["outcome", "reason"]
)

# Booking metrics
reservations_total = Counter("forme_reservations_total", "Reservation lifecycle events", ["event"])

# Waitlist metrics
waitlist_signups_total = Counter("forme_waitlist_signups_total", "Waitlist and demo signups", ["kind", "outcome"])
