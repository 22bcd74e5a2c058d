"""
Service context for log lines.

Identifies which process wrote a log line, locally (PID) or inside a container
(hostname), so interleaved logs from several workers can be told apart.
"""

import os
from functools import lru_cache
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'holidays-planner')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    if os.getenv('KUBERNETES_SERVICE_HOST') or os.path.exists('/.dockerenv'):
        instance = socket.gethostname()[:12]
    else:
        instance = str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance}'
