from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from redis import Redis
from rq import Queue

RQ_KEYS = {'job_timeout', 'timeout', 'at_front', 'depends_on', 'result_ttl', 'ttl', 'meta', 'description'}


class RQWrapper:
    def __init__(self):
        self.redis = None
        self.queue = None
        self.logger = None

    def init_app(self, app):
        self.logger = app.logger
        url = app.config.get("REDIS_URL")
        if not url:
            # no queue configured: jobs run in the caller's process
            self.redis = None
            self.queue = None
            return
        try:
            self.redis = Redis.from_url(url)
            self.queue = Queue("default", connection=self.redis)
        except Exception:
            app.logger.exception('Redis/RQ init failed, falling back to sync execution')
            self.redis = None
            self.queue = None

    def _run_sync(self, args, kwargs):
        func = args[0] if args else None
        func_args = args[1:] if len(args) > 1 else ()
        # strip RQ kwargs that are not valid for the function call
        safe_kwargs = {k: v for k, v in kwargs.items() if k not in RQ_KEYS}
        if func:
            return func(*func_args, **safe_kwargs)
        return None

    def enqueue(self, *args, **kwargs):
        """Enqueue to RQ when available, otherwise call the job synchronously.

        Unlike a queued job, a synchronous call propagates its exception to the
        caller, so call sites keep their own error boundary either way.
        """
        if not self.queue:
            return self._run_sync(args, kwargs)

        try:
            return self.queue.enqueue(*args, **kwargs)
        except Exception:
            # Redis went away after init: run in-process instead
            if self.logger:
                self.logger.exception('RQ enqueue failed, falling back to sync execution')
            return self._run_sync(args, kwargs)


db = SQLAlchemy()
login_manager = LoginManager()
rq = RQWrapper()
