from flask_login import UserMixin

from ome import db, bcrypt

TIPO_ADMINISTRADOR = "administrador"
TIPO_USUARIO = "usuario"
TIPOS_USUARIO = (TIPO_ADMINISTRADOR, TIPO_USUARIO)


class User(UserMixin, db.Model):
    """Usuario de la intranet; ``tipo_usuario`` decide el menú lateral."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    tipo_usuario = db.Column(db.String(20), nullable=False, default=TIPO_USUARIO)

    def set_password(self, raw_password: str) -> None:
        self.password_hash = bcrypt.generate_password_hash(raw_password).decode("utf-8")

    def check_password(self, raw_password: str) -> bool:
        if not self.password_hash:
            return False
        return bcrypt.check_password_hash(self.password_hash, raw_password)

    @property
    def is_admin(self) -> bool:
        return self.tipo_usuario == TIPO_ADMINISTRADOR

    def __str__(self):
        return self.email
