# prayerclock/metrics.py

from prometheus_client import Counter, Histogram

# Define Prometheus metrics

# Upstream API Metrics
API_REQUESTS_TOTAL = Counter('prayerclock_api_requests_total', 'Total upstream API requests', ['adapter_name', 'endpoint', 'status'])
API_REQUEST_DURATION_SECONDS = Histogram('prayerclock_api_request_duration_seconds', 'Upstream API request duration in seconds', ['adapter_name', 'endpoint'])

# Time Conversion Metrics
TIME_LOOKUPS_TOTAL = Counter('prayerclock_time_lookups_total', 'Total prayer time lookups by outcome', ['lookup', 'outcome'])
TIME_PROJECTIONS_TOTAL = Counter('prayerclock_time_projections_total', 'Total cross-timezone projections', ['target_timezone'])
