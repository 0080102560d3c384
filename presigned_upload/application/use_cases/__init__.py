from .upload_file import UploadFileUseCase, presigned_form_fields

__all__ = ["UploadFileUseCase", "presigned_form_fields"]
