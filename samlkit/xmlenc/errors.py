"""Exceptions raised while encrypting or decrypting XML."""

from __future__ import annotations


class XMLEncError(Exception):
    """Base class for XML encryption and decryption failures."""


class AlgorithmNotImplementedError(XMLEncError):
    """The encryption or digest algorithm named in a document is not supported."""

    def __init__(self, algorithm: str) -> None:
        self.algorithm = algorithm
        super().__init__(f"algorithm is not implemented: {algorithm}")


class CannotFindRequiredElementError(XMLEncError):
    """An element needed to decrypt a document is missing."""

    def __init__(self, element: str) -> None:
        self.element = element
        super().__init__(f"cannot find required element: {element}")


class IncorrectTagError(XMLEncError):
    """The element is neither an EncryptedType nor an EncryptedKey."""

    def __init__(self) -> None:
        super().__init__("tag must be an EncryptedType or EncryptedKey")


class IncorrectKeyLengthError(XMLEncError):
    """A fixed-length key has the wrong length."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"expected key to be {length} bytes")


class IncorrectKeyTypeError(XMLEncError):
    """The key is not of the type the algorithm needs."""

    def __init__(self, expected: str) -> None:
        self.expected = expected
        super().__init__(f"expected key to be {expected}")