"""
Tests for the error taxonomy and exception mapping.
"""

from pdf_creator_core.errors import (
    BaseAppError,
    CancellationError,
    ErrorCode,
    ErrorType,
    ImageDecodeError,
    NoImagesFound,
    NotADirectory,
    SystemError,
    WriteError,
    map_exception,
    to_user_message,
)


class TestErrorClasses:
    """Test the concrete error classes."""

    def test_not_a_directory(self):
        error = NotADirectory("/nowhere")
        assert error.code == ErrorCode.NOT_A_DIRECTORY
        assert error.type == ErrorType.FILE
        assert error.folder == "/nowhere"
        assert "/nowhere" in str(error)

    def test_image_decode_error_names_file(self):
        error = ImageDecodeError("/photos/broken.jpg", technical_message="cannot identify image file")
        assert error.code == ErrorCode.IMAGE_DECODE_ERROR
        assert error.file == "/photos/broken.jpg"
        assert "broken.jpg" in error.user_message

    def test_write_error_is_retriable(self):
        error = WriteError("/readonly/out.pdf")
        assert error.code == ErrorCode.WRITE_ERROR
        assert error.retriable

    def test_cancellation_error(self):
        error = CancellationError()
        assert error.code == ErrorCode.OPERATION_CANCELLED
        assert isinstance(error, BaseAppError)

    def test_errors_are_exceptions(self):
        assert isinstance(NoImagesFound(), Exception)

    def test_to_dict(self):
        data = NoImagesFound("/photos").to_dict()
        assert data["code"] == "NO_IMAGES_FOUND"
        assert data["type"] == "file"
        assert data["context"] == {"folder": "/photos"}

    def test_repr(self):
        assert repr(WriteError("out.pdf")).startswith("WriteError(type=file, code=WRITE_ERROR")


class TestMapException:
    def test_app_error_passes_through(self):
        error = NoImagesFound()
        assert map_exception(error) is error

    def test_permission_error(self):
        mapped = map_exception(PermissionError("denied"))
        assert isinstance(mapped, SystemError)
        assert mapped.code == ErrorCode.OS_ERROR
        assert mapped.technical_message == "PermissionError: denied"

    def test_memory_error(self):
        assert map_exception(MemoryError()).code == ErrorCode.MEMORY_ERROR

    def test_unknown_exception(self):
        mapped = map_exception(RuntimeError("boom"), {"step": "render"})
        assert mapped.code == ErrorCode.UNKNOWN
        assert mapped.user_message == "An unexpected error occurred"
        assert mapped.context == {"step": "render"}


class TestToUserMessage:
    def test_no_images_message_differs_from_generic(self):
        no_images = to_user_message(NoImagesFound("/photos"))
        generic = to_user_message(ImageDecodeError("/photos/x.png"))
        assert "choose a folder" in no_images
        assert generic.startswith("Failed to create the PDF")

    def test_retriable_hint(self):
        assert to_user_message(WriteError("out.pdf")).endswith("You can try again.")
