"""
Noor Archive - Submission storage and synchronization for the Noor Project.

This package keeps visitor submissions (text or drawings) in a durable local
store, mirrors them to a remote canonical store on a best-effort basis, and
reconciles both sources for the archive and admin views.
"""

__version__ = "1.0.0"
__author__ = "Development Team"
__email__ = "dev@example.com"
