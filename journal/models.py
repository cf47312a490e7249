from datetime import datetime
from app.extensions import db

MOODS = ('happy', 'sad', 'neutral', 'excited', 'anxious', 'calm', 'angry', 'grateful')
DEFAULT_MOOD = 'neutral'


class Journal(db.Model):
    """Journal entry model."""
    __tablename__ = 'journals'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    content = db.Column(db.Text, nullable=False)
    mood = db.Column(db.String(20), nullable=False, default=DEFAULT_MOOD)
    ai_summary = db.Column(db.Text, nullable=False, default='')
    ai_mood = db.Column(db.String(20), nullable=False, default='')
    tags = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    def apply_analysis(self, analysis):
        """Write summary and both mood fields in one step."""
        self.ai_summary = analysis.summary
        self.ai_mood = analysis.mood
        self.mood = analysis.mood

    def to_dict(self):
        """Return journal data as dictionary."""
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'mood': self.mood,
            'ai_summary': self.ai_summary,
            'ai_mood': self.ai_mood,
            'tags': list(self.tags or []),
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
            'user_id': self.user_id
        }

    def __repr__(self):
        return f'<Journal {self.title}>'
