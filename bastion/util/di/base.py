from dishka import Provider

__all__ = ["Provider"]
