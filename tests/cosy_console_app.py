"""
Application factory loaded by the console tests through --app
"""
from cosy.application import Application, ApplicationConfig
from cosy.bootstrap import create_app
from cosy.service_provider import ServiceProvider


class NotesServiceProvider(ServiceProvider):
    def register(self):
        self.app.singleton('notes', lambda container: {'count': 2})

    def boot(self):
        router = self.app.make('router')

        def count(context):
            return self.app.make('notes')['count']

        def add(context, a, b):
            return a + b

        router.get('notes:count', count).description('Count notes')
        router.get('math:add', add).validation({
            0: {'required': True, 'type': 'number'},
            1: {'required': True, 'type': 'number'},
        })


async def create():
    return await create_app(ApplicationConfig(name='console-notes', env='test', providers=[NotesServiceProvider]))


empty = Application(ApplicationConfig(name='empty', env='test'))

not_an_app = {'name': 'nope'}


async def bare():
    return await create_app(ApplicationConfig(name='bare', env='test'))
