import pandas as pd
from pathlib import Path

COLUMNS = ["id", "title", "authors", "review", "added_at", "updated_at", "cover_i", "key"]


class DataProcessor:
    """
    Core component for Pandas DataFrame manipulations.
    Turns the bookmark collection into a table for display, filtering and export.
    """

    def to_frame(self, entries) -> pd.DataFrame:
        """
        One row per bookmark, in collection order (most recent activity first).
        """
        rows = [
            {
                "id": e.id,
                "title": e.title,
                "authors": e.author,
                "review": e.review,
                "added_at": e.added_at,
                "updated_at": e.updated_at or "",
                "cover_i": e.cover_image_id,
                "key": e.catalog_key,
            }
            for e in entries
        ]
        return pd.DataFrame(rows, columns=COLUMNS)

    def sort_by_added(self, df: pd.DataFrame) -> pd.DataFrame:
        """Newest bookmark first; rows with unparseable dates go last."""
        if df is None or df.empty:
            return df
        added = pd.to_datetime(df['added_at'], errors='coerce', utc=True)
        return df.assign(_added=added).sort_values('_added', ascending=False, na_position='last').drop(columns='_added').reset_index(drop=True)

    def filter_frame(self, df: pd.DataFrame, text: str) -> pd.DataFrame:
        """Case-insensitive substring match on title, authors or review."""
        if df is None or df.empty or not text:
            return df
        needle = text.lower()
        mask = pd.Series(False, index=df.index)
        for col in ('title', 'authors', 'review'):
            mask |= df[col].fillna('').str.lower().str.contains(needle, regex=False)
        return df[mask].reset_index(drop=True)

    def export(self, entries, path) -> Path:
        """
        Export the collection. '.csv' writes a table, anything else JSON records.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        df = self.to_frame(entries)
        if path.suffix.lower() == '.csv':
            df.to_csv(path, index=False)
        else:
            df.to_json(path, orient='records', indent=4, force_ascii=False)
        return path
