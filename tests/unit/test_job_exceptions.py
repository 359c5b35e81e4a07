from docdiff.jobs.exceptions import error_message


class TestErrorMessage:
    def test_uses_exception_text(self) -> None:
        assert error_message(ValueError("bad input")) == "bad input"

    def test_falls_back_to_class_name(self) -> None:
        assert error_message(TimeoutError()) == "TimeoutError"

    def test_truncates_long_messages(self) -> None:
        message = error_message(RuntimeError("x" * 5000))
        assert len(message) == 1000
        assert message.endswith("...")
