"""Login dialog - Collects credentials for sign-in, registration or federated sign-in."""

from typing import Optional

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QInputDialog,
    QLineEdit,
    QPushButton,
)

from vip_reader.core import SignInMode, SignInRequest


class LoginDialog(QDialog):
    """Modal email/password prompt with an optional account-creation mode."""

    def __init__(self, parent=None, federated_enabled: bool = False):
        super().__init__(parent)
        self.setWindowTitle("Sign In")
        self._provider_token: Optional[str] = None

        layout = QFormLayout(self)
        self.email_edit = QLineEdit()
        self.password_edit = QLineEdit()
        self.password_edit.setEchoMode(QLineEdit.Password)
        self.name_edit = QLineEdit()
        self.register_check = QCheckBox("Create a new account")
        self.register_check.toggled.connect(self._set_register_mode)

        layout.addRow("Email", self.email_edit)
        layout.addRow("Password", self.password_edit)
        layout.addRow("Name", self.name_edit)
        layout.addRow(self.register_check)

        self.federated_button = QPushButton("Sign in with Google")
        self.federated_button.clicked.connect(self._request_federated_token)
        self.federated_button.setVisible(federated_enabled)
        layout.addRow(self.federated_button)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addRow(buttons)

        self._set_register_mode(False)

    def _set_register_mode(self, registering: bool):
        self.name_edit.setEnabled(registering)
        self.setWindowTitle("Create Account" if registering else "Sign In")

    def _request_federated_token(self):
        token, ok = QInputDialog.getText(self, "Google Sign-In", "Google ID token:")
        if ok and token.strip():
            self._provider_token = token.strip()
            self.accept()

    def sign_in_request(self) -> Optional[SignInRequest]:
        """What the reader asked for, or None if required fields are empty."""
        if self._provider_token:
            return SignInRequest(SignInMode.FEDERATED, provider_token=self._provider_token)

        email = self.email_edit.text().strip()
        password = self.password_edit.text()
        if not email or not password:
            return None
        if self.register_check.isChecked():
            return SignInRequest(
                SignInMode.REGISTER,
                email=email,
                password=password,
                display_name=self.name_edit.text().strip(),
            )
        return SignInRequest(SignInMode.PASSWORD, email=email, password=password)
