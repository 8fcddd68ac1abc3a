"""
String Helper Functions
Laravel-style string matching utilities
"""
import re


class Str:
    """
    String helper class (Laravel-style)
    """

    @staticmethod
    def is_(pattern: str, value: str) -> bool:
        """
        Determine if a string matches a wildcard pattern

        Only '*' is special and matches any run of characters,
        including slashes.

        Args:
            pattern: Pattern such as 'admin/*'
            value: String to test

        Returns:
            True if value matches pattern

        Example:
            Str.is_('admin/*', 'admin/users/1')  # True
            Str.is_('admin', 'admin/users')  # False
        """
        if pattern == value:
            return True

        regex = re.escape(pattern).replace(r'\*', '.*')
        return re.fullmatch(regex, value, re.DOTALL) is not None

    @staticmethod
    def explode(delimiter: str, value: str) -> list:
        """
        Split a string on a delimiter (PHP explode semantics)

        Empty segments are kept, so 'a||b' gives ['a', '', 'b'].
        An empty string gives an empty list.

        Example:
            Str.explode('|', 'auth|csrf')  # ['auth', 'csrf']
        """
        if not value:
            return []
        return value.split(delimiter)
