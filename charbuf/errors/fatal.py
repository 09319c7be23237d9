# FILE: charbuf/errors/fatal.py
# ------------------------------------------------------------------------------
class CharBufferError(Exception):
    def __init__(self, message, context=None):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

class RangeError(CharBufferError, IndexError):
    pass

class AllocationError(CharBufferError, MemoryError):
    pass

class LengthOverflow(AllocationError):
    pass

class ConfigurationError(CharBufferError):
    pass
