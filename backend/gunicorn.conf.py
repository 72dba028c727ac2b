# App
wsgi_app = "backregister:create_app()"

# Bind & workers
bind = "0.0.0.0:8000"
workers = 2  # override with env GUNICORN_WORKERS
threads = 4  # requests are independent; each thread blocks only on its own upstream call
timeout = 60  # above UPSTREAM_CONNECT_TIMEOUT + UPSTREAM_READ_TIMEOUT
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = "info"  # override with env LOG_LEVEL

# Honour proxy headers
forwarded_allow_ips = "*"
proxy_protocol = False
