"""Metrics definitions for the restaurant search service."""

from prometheus_client import Counter, Histogram, Gauge


# Application Metrics
REQUEST_COUNT = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

REQUEST_DURATION = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration',
    ['method', 'endpoint']
)

APPLICATION_ERRORS = Counter(
    'application_errors_total',
    'Total application errors',
    ['type', 'endpoint']
)


# Search Metrics
SEARCH_REQUESTS_TOTAL = Counter(
    'search_requests_total',
    'Total search requests',
    ['search_type']
)

SEARCH_DURATION_SECONDS = Histogram(
    'search_duration_seconds',
    'Search duration in seconds',
    ['search_type']
)

SEARCH_RESULTS_COUNT = Histogram(
    'search_results_count',
    'Number of restaurants returned per page',
    ['search_type'],
    buckets=[0, 1, 3, 6, 9, 12]
)

ZERO_RESULTS_SEARCHES_TOTAL = Counter(
    'zero_results_searches_total',
    'Total searches with zero results',
    ['search_type']
)

PAGE_OVERFLOW_TOTAL = Counter(
    'search_page_overflow_total',
    'Searches that requested a page past the last one'
)

ROWS_SKIPPED_TOTAL = Counter(
    'search_rows_skipped_total',
    'Result rows dropped because they could not be decoded',
    ['query_type']
)


# Database Metrics
DATABASE_CONNECTIONS = Gauge(
    'database_connections',
    'Database connections in use',
    ['database', 'pool']
)

DATABASE_CONNECTION_POOL_UTILIZATION = Gauge(
    'database_connection_pool_utilization',
    'Database connection pool utilization',
    ['database']
)

DATABASE_QUERY_DURATION_SECONDS = Histogram(
    'database_query_duration_seconds',
    'Database query duration',
    ['database', 'query_type', 'table'],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

DATABASE_QUERY_ERRORS_TOTAL = Counter(
    'database_query_errors_total',
    'Database query errors',
    ['database', 'query_type']
)


def record_search_request(search_type: str, duration: float, result_count: int):
    """Record search request metrics."""
    SEARCH_REQUESTS_TOTAL.labels(search_type=search_type).inc()
    SEARCH_DURATION_SECONDS.labels(search_type=search_type).observe(duration)
    SEARCH_RESULTS_COUNT.labels(search_type=search_type).observe(result_count)

    if result_count == 0:
        ZERO_RESULTS_SEARCHES_TOTAL.labels(search_type=search_type).inc()


def record_page_overflow():
    """Record a request for a page beyond the last page."""
    PAGE_OVERFLOW_TOTAL.inc()


def record_skipped_row(query_type: str):
    """Record a result row that failed to decode."""
    ROWS_SKIPPED_TOTAL.labels(query_type=query_type).inc()


def record_database_metrics(database: str, connections_used: int, connections_available: int):
    """Record database connection metrics."""
    total_connections = connections_used + connections_available
    DATABASE_CONNECTIONS.labels(database=database, pool='total').set(total_connections)
    DATABASE_CONNECTIONS.labels(database=database, pool='used').set(connections_used)
    DATABASE_CONNECTIONS.labels(database=database, pool='available').set(connections_available)

    if total_connections > 0:
        utilization = connections_used / total_connections
        DATABASE_CONNECTION_POOL_UTILIZATION.labels(database=database).set(utilization)


def record_database_query_performance(database: str, query_type: str, table: str, duration: float, is_error: bool = False):
    """Record database query performance metrics."""
    DATABASE_QUERY_DURATION_SECONDS.labels(
        database=database,
        query_type=query_type,
        table=table
    ).observe(duration)

    if is_error:
        DATABASE_QUERY_ERRORS_TOTAL.labels(
            database=database,
            query_type=query_type
        ).inc()
