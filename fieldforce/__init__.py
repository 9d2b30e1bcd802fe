"""
fieldforce: account lifecycle and session-validity loop for the field-force
(MR) app: Directory, Session Holder, Validity Poller and Activity Stamper.
"""

__version__ = "0.1.0"
