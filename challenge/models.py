from datetime import datetime
from app.extensions import db

QUESTION_TYPES = ('history', 'fun', 'birthday', 'invention', 'trivia')


class ChallengeRecord(db.Model):
    """A user's answer to the daily question; at most one per user per day."""
    __tablename__ = 'challenge_records'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'date', name='uq_challenge_user_date'),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    date = db.Column(db.Date, nullable=False)
    question = db.Column(db.Text, nullable=False)
    question_type = db.Column(db.String(20), nullable=False, default='trivia')
    answer = db.Column(db.Text, nullable=False)
    completed = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'date': self.date.isoformat(),
            'question': self.question,
            'question_type': self.question_type,
            'answer': self.answer,
            'completed': self.completed,
            'created_at': self.created_at.isoformat()
        }

    def __repr__(self):
        return f'<ChallengeRecord {self.user_id} {self.date}>'
