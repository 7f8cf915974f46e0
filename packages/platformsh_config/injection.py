import inspect

from injector import Injector, singleton


class GlobalInjector:
    _injector = None
    # Decorated classes are remembered so that reset() does not lose them.
    _registrations = []

    @classmethod
    def get_instance_id(cls):
        return id(cls.get_injector())

    @classmethod
    def get_injector(cls):
        if cls._injector is None:
            cls._injector = Injector(auto_bind=True)
            cls._apply_registrations()
        return cls._injector

    @classmethod
    def reset(cls):
        """Drop the process injector. Default bindings are re-applied on next use."""
        cls._injector = None

    @classmethod
    def get(cls, interface):
        return cls.get_injector().get(interface)

    @classmethod
    def bind(cls, interface, implementation):
        cls.get_injector().binder.bind(interface, to=implementation)

    @classmethod
    def autobind(cls, *interfaces):
        def decorator(cls_to_bind):
            cls._register(cls_to_bind, interfaces, scoped=False)
            return cls_to_bind

        return decorator

    @classmethod
    def singleton_autobind(cls, *interfaces):
        def decorator(cls_to_bind):
            singleton_cls = singleton(cls_to_bind)
            cls._register(singleton_cls, interfaces, scoped=True)
            return singleton_cls

        return decorator

    @classmethod
    def _register(cls, cls_to_bind, interfaces, scoped):
        targets = list(interfaces) or [
            base for base in cls_to_bind.__bases__ if inspect.isabstract(base)
        ]
        cls._registrations.append((cls_to_bind, targets, scoped))
        if cls._injector is not None:
            cls._bind_registration(cls_to_bind, targets, scoped)

    @classmethod
    def _apply_registrations(cls):
        for cls_to_bind, targets, scoped in cls._registrations:
            cls._bind_registration(cls_to_bind, targets, scoped)

    @classmethod
    def _bind_registration(cls, cls_to_bind, targets, scoped):
        binder = cls._injector.binder
        scope = singleton if scoped else None
        for interface in targets:
            binder.bind(interface, to=cls_to_bind, scope=scope)
        if scoped:
            binder.bind(cls_to_bind, to=cls_to_bind, scope=singleton)


def get_platform_service(iface):
    return GlobalInjector.get(iface)
