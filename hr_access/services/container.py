from hr_access.repositories.data_store import DataStore
from hr_access.repositories.directory import InMemoryDirectory
from hr_access.services.approval_service import ApprovalService
from hr_access.services.audit_service import EventLogger
from hr_access.services.auth_service import AuthService
from hr_access.services.authorizer import ApprovalAuthorizer


store = DataStore()
event_logger = EventLogger()

directory = InMemoryDirectory(store)
authorizer = ApprovalAuthorizer(directory=directory, event_logger=event_logger)
auth_service = AuthService(store=store, event_logger=event_logger)
approval_service = ApprovalService(
    store=store,
    event_logger=event_logger,
    auth_service=auth_service,
    authorizer=authorizer,
)
