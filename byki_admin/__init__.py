"""BYKI admin dashboard API: data access over the shared Firestore database."""
