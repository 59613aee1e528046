from humanbench import db


class KeyValue(db.Model):
    __tablename__ = 'key_value'
    key = db.Column(db.String(128), primary_key=True)
    value = db.Column(db.Text, nullable=False)

    def to_dict(self):
        return {
            'key': self.key,
            'value': self.value,
        }
