from abc import ABC, abstractmethod

from src.common.dto import Appointment, Reminder


class NotificationSenderPort(ABC):
    """A False return or a raised exception is a failed send."""

    @abstractmethod
    async def send(self, reminder: Reminder) -> bool:
        pass

    @abstractmethod
    async def send_confirmation(self, appointment: Appointment) -> bool:
        pass

    @abstractmethod
    async def send_cancellation(self, appointment: Appointment) -> bool:
        pass
