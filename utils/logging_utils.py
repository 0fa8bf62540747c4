def mask_value(value: str) -> str:
    """Mask emails and long tokens before they reach a log line."""
    if not isinstance(value, str):
        return value
    if '@' in value:  # email
        name, _, domain = value.partition('@')
        return (name[:2] + '***@' + domain) if name else '***@' + domain
    if len(value) > 12:
        return value[:4] + '...' + value[-4:]
    return '***'
