"""Exception types for XML Encryption failures."""