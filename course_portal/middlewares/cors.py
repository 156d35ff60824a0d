from starlette.middleware.cors import CORSMiddleware

from course_portal.config import config


def setup_cors(app):
    origins = config.allowed_origins

    # Any origin unless the deployment narrows it down
    if not origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=3600,
    )
