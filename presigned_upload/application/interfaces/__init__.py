from .form_poster import IFormPoster, SendProgressCallback
from .progress import IProgressReporter
from .uploader import IUploader
from .utils import IClock

__all__ = [
    "IFormPoster",
    "SendProgressCallback",
    "IProgressReporter",
    "IUploader",
    "IClock",
]
