class CblError(Exception):
    """ Base class for all cbl errors"""
    pass

class IndentTableError(CblError):
    """ Raised when an indent rule table is built with a broken alias graph"""

class VocabularyError(CblError):
    """ Raised when a vocabulary entry is not a valid identifier"""
