"""
Unit tests for configuration loading
"""
import pytest

from medart_commons.config import Config
from medart_commons.exceptions import ConfigurationError


STORAGE_ENV = {
    'R2_ENDPOINT': 'https://account.r2.cloudflarestorage.com',
    'R2_ACCESS_KEY_ID': 'key-id',
    'R2_SECRET_ACCESS_KEY': 'secret',
    'R2_BUCKET_NAME': 'medart-images',
    'R2_PUBLIC_ENDPOINT': 'https://images.example.com',
}
IMGPROXY_ENV = {
    'IMGPROXY_URL': 'https://imgproxy.example.com',
    'IMGPROXY_KEY': 'aa' * 32,
    'IMGPROXY_SALT': 'bb' * 32,
}


@pytest.fixture
def clean_env(monkeypatch):
    for name in list(STORAGE_ENV) + list(IMGPROXY_ENV) + ['R2_REGION', 'MAX_UPLOAD_SIZE', 'UPLOAD_URL_EXPIRY']:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(f'MEDART_{name}', raising=False)
    return monkeypatch


class TestGetParameter:
    """Test cases for the lookup order"""
    
    def test_default(self, clean_env):
        assert Config().get_parameter('r2-region', 'auto') == 'auto'
    
    def test_plain_environment_variable(self, clean_env):
        clean_env.setenv('R2_REGION', 'weur')
        
        assert Config().get_parameter('r2-region', 'auto') == 'weur'
    
    def test_namespaced_variable_wins(self, clean_env):
        clean_env.setenv('R2_REGION', 'weur')
        clean_env.setenv('MEDART_R2_REGION', 'enam')
        
        assert Config().get_parameter('r2-region', 'auto') == 'enam'
    
    def test_parameter_store_disabled(self, clean_env):
        config = Config()
        
        assert config.parameter_store_enabled is False
        assert config.get_ssm_parameter('r2-endpoint') is None
    
    def test_typed_defaults(self, clean_env):
        config = Config()
        
        assert config.max_upload_size == 10 * 1024 * 1024
        assert config.upload_url_expiry == 300
    
    def test_bool_parameter(self, clean_env):
        clean_env.setenv('ENABLE_DEBUG_LOGGING', 'yes')
        
        assert Config().enable_debug_logging is True
    
    def test_bool_parameter_default(self, clean_env):
        clean_env.delenv('ENABLE_DEBUG_LOGGING', raising=False)
        clean_env.delenv('MEDART_ENABLE_DEBUG_LOGGING', raising=False)
        
        assert Config().enable_debug_logging is False
    
    def test_bad_int_falls_back(self, clean_env):
        clean_env.setenv('MAX_UPLOAD_SIZE', 'lots')
        
        assert Config().max_upload_size == 10 * 1024 * 1024


class TestStorageSettings:
    """Test cases for storage settings"""
    
    def test_complete(self, clean_env):
        for name, value in STORAGE_ENV.items():
            clean_env.setenv(name, value)
        
        settings = Config().storage_settings()
        
        assert settings.endpoint == 'https://account.r2.cloudflarestorage.com'
        assert settings.bucket_name == 'medart-images'
        assert settings.region == 'auto'
        assert settings.public_endpoint == 'https://images.example.com'
    
    def test_missing_credentials_fail_closed(self, clean_env):
        clean_env.setenv('R2_ENDPOINT', STORAGE_ENV['R2_ENDPOINT'])
        clean_env.setenv('R2_BUCKET_NAME', STORAGE_ENV['R2_BUCKET_NAME'])
        
        with pytest.raises(ConfigurationError) as exc_info:
            Config().storage_settings()
        
        assert 'r2-access-key-id' in exc_info.value.message
        assert 'r2-secret-access-key' in exc_info.value.message
        assert exc_info.value.status_code == 500


class TestImgproxySettings:
    """Test cases for proxy signing settings"""
    
    def test_complete(self, clean_env):
        for name, value in {**IMGPROXY_ENV, 'R2_PUBLIC_ENDPOINT': STORAGE_ENV['R2_PUBLIC_ENDPOINT']}.items():
            clean_env.setenv(name, value)
        
        settings = Config().imgproxy_settings()
        
        assert settings.key == b'\xaa' * 32
        assert settings.salt == b'\xbb' * 32
        assert settings.public_endpoint == 'https://images.example.com'
    
    @pytest.mark.parametrize('missing', ['IMGPROXY_URL', 'IMGPROXY_KEY', 'IMGPROXY_SALT', 'R2_PUBLIC_ENDPOINT'])
    def test_any_missing_disables_signing(self, clean_env, missing):
        for name, value in {**IMGPROXY_ENV, 'R2_PUBLIC_ENDPOINT': STORAGE_ENV['R2_PUBLIC_ENDPOINT']}.items():
            if name != missing:
                clean_env.setenv(name, value)
        
        assert Config().imgproxy_settings() is None
    
    def test_invalid_hex_disables_signing(self, clean_env):
        for name, value in {**IMGPROXY_ENV, 'R2_PUBLIC_ENDPOINT': STORAGE_ENV['R2_PUBLIC_ENDPOINT']}.items():
            clean_env.setenv(name, value)
        clean_env.setenv('IMGPROXY_KEY', 'not-hex')
        
        assert Config().imgproxy_settings() is None
