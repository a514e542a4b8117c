"""
Firebase to Supabase Migration Tool

Copies users, storage files and Firestore collections from a Firebase project
into Supabase, and provides thin helpers over the Supabase database and
storage clients.
"""

__version__ = "0.1.0"
