class NotFoundException(Exception):
    pass


class DoctorNotFoundException(NotFoundException):
    pass


class AppointmentNotFoundException(NotFoundException):
    pass


class InvalidAppointmentTimeException(ValueError):
    pass


class NotificationException(Exception):
    pass


class CatalogUnavailableException(Exception):
    pass
