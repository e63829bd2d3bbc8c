def isoformat(value):
    return value.isoformat() if value else None
