import os

from hypothesis import settings


def configure_hypo() -> None:
    settings.register_profile("fast", max_examples=25, deadline=None)
    settings.register_profile("slow", max_examples=500, deadline=None)
    if os.environ.get("HYPO_SLOW") == "1":
        settings.load_profile("slow")
    else:
        settings.load_profile("fast")
