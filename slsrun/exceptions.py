class SlsRunError(Exception):
    """Base exception for slsrun"""
    pass

class ToolNotFoundError(SlsRunError):
    """Raised when the serverless executable cannot be found on PATH"""
    pass

class DescriptorError(SlsRunError):
    """Base exception for service descriptor problems"""
    pass

class DescriptorReadError(DescriptorError):
    """Raised when the service descriptor is missing or unreadable"""
    pass

class DescriptorFormatError(DescriptorError):
    """Raised when the service descriptor cannot be deserialized"""
    pass

class ProviderMismatchError(DescriptorError):
    """Raised when the descriptor declares a different provider than expected"""
    def __init__(self, expected, found):
        self.expected = expected
        self.found = found
        super().__init__(f"expected provider {expected}, found provider: {found}")

class CommandError(SlsRunError):
    """Base exception for external command failures"""
    pass

class CommandStartError(CommandError):
    """Raised when a process cannot be started"""
    def __init__(self, command, cause):
        self.command = command
        super().__init__(f"Failed to start {command[0]}: {cause}")

class CommandExecutionError(CommandError):
    """Raised when a command exits with a non-zero status"""
    def __init__(self, exit_code, stderr, command=None, stdout=""):
        self.exit_code = exit_code
        self.stderr = stderr
        self.stdout = stdout
        self.command = command
        super().__init__(f"Command failed (exit {exit_code}): {stderr}")

class StreamCaptureError(CommandError):
    """Raised when copying a child's stdout or stderr fails"""
    def __init__(self, command=None):
        self.command = command
        super().__init__("failed to capture stdout or stderr")
