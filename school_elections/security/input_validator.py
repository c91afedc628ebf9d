# school_elections/security/input_validator.py

import html
import re

import bleach

from school_elections.errors import MissingField

# Request payload checks and sanitizing for imported text.


class InputValidator:
    def __init__(self):
        self.allowed_html_tags = []
        self.allowed_html_attributes = {}

        self.patterns = {
            'dni': re.compile(r'^[A-Za-z0-9-]{1,32}$'),
            'course': re.compile(r'^[A-Za-z0-9-]{1,32}$'),
            'xss_script': re.compile(r'<script[^>]*>.*?</script>', re.IGNORECASE | re.DOTALL),
            'xss_event': re.compile(r'\bon\w+\s*=', re.IGNORECASE),
        }

    def require(self, payload, *fields):
        """Return the named fields as trimmed strings, raising MissingField for the first absent one."""
        values = []
        for field in fields:
            value = payload.get(field) if isinstance(payload, dict) else None
            if value is None or str(value).strip() == '':
                raise MissingField(field)
            values.append(str(value).strip())
        return values

    def optional(self, payload, field):
        value = payload.get(field) if isinstance(payload, dict) else None
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    def sanitize_string(self, input_str, max_length=200):
        if not isinstance(input_str, str):
            raise ValueError("Input must be a string")
        if len(input_str) > max_length:
            input_str = input_str[:max_length]

        sanitized = re.sub(self.patterns['xss_script'], '', input_str)
        sanitized = re.sub(self.patterns['xss_event'], '', sanitized)
        sanitized = bleach.clean(sanitized, tags=self.allowed_html_tags,
                                 attributes=self.allowed_html_attributes, strip=True)
        # bleach escapes &, < and >; names are stored as plain text
        return html.unescape(sanitized).strip()

    def validate_dni(self, dni):
        return isinstance(dni, str) and bool(self.patterns['dni'].match(dni))

    def validate_course(self, course):
        return isinstance(course, str) and bool(self.patterns['course'].match(course))
