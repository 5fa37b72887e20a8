import os

# gunicorn -c gunicorn_config.py main:app
bind = f"0.0.0.0:{os.getenv('PORT', '5000')}"

# Each worker starts its own scheduler, so the auto-insight job needs a single worker
auto_run_minutes = int(os.getenv("AI_AUTO_RUN_MINUTES", "0"))
workers = 1 if auto_run_minutes > 0 else int(os.getenv("WEB_CONCURRENCY", "2"))
worker_class = "uvicorn.workers.UvicornWorker"
timeout = 120  # Gemini calls can be slow
keepalive = 5

# Recycle workers periodically
max_requests = 1000
max_requests_jitter = 50

# Logging to stdout/stderr
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info")

proc_name = "growthos-backend"
