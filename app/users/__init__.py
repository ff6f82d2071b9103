"""User directory: accounts, profiles, follows and bookmarks."""
