"""External systems: Firebase (Firestore, Auth, Storage) and security helpers."""
